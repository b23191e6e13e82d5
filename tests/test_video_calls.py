from __future__ import annotations

from uuid import uuid4

from conftest import auth, create_pod_via_api, create_user_via_api


def create_call(client, pod: dict, host: dict, **fields) -> dict:
    payload = {"title": "Integrals review", "meetingUrl": "https://meet.jit.si/calc-crew", **fields}
    res = client.post(f"/api/pods/{pod['id']}/video-calls", json=payload, headers=auth(host))
    assert res.status_code == 201, res.text
    return res.json()


def test_create_and_list_pod_video_calls(client) -> None:
    host = create_user_via_api(client, "host@example.com")
    pod = create_pod_via_api(client, host)

    first = create_call(client, pod, host)
    second = create_call(client, pod, host, title="Limits drill", maxParticipants=4)

    assert first["hostId"] == host["id"]
    assert first["isActive"] is False
    assert first["participantCount"] == 0
    assert first["maxParticipants"] == 8
    assert second["maxParticipants"] == 4

    calls = client.get(f"/api/pods/{pod['id']}/video-calls").json()
    assert [c["id"] for c in calls] == [second["id"], first["id"]]


def test_create_video_call_validation(client) -> None:
    host = create_user_via_api(client, "host@example.com")
    pod = create_pod_via_api(client, host)

    res = client.post(f"/api/pods/{pod['id']}/video-calls", json={"title": "x"})
    assert res.status_code == 401
    res = client.post(f"/api/pods/{pod['id']}/video-calls", json={"title": ""}, headers=auth(host))
    assert res.status_code == 422
    res = client.post(f"/api/pods/{uuid4()}/video-calls", json={"title": "Ghost"}, headers=auth(host))
    assert res.status_code == 404


def test_only_host_can_start_and_end_call(client) -> None:
    host = create_user_via_api(client, "host@example.com")
    guest = create_user_via_api(client, "guest@example.com")
    pod = create_pod_via_api(client, host)
    call = create_call(client, pod, host)

    assert client.get(f"/api/pods/{pod['id']}/active-call").json() is None

    res = client.put(f"/api/video-calls/{call['id']}/status", json={"isActive": True}, headers=auth(guest))
    assert res.status_code == 403

    res = client.put(f"/api/video-calls/{call['id']}/status", json={"isActive": True}, headers=auth(host))
    assert res.status_code == 200
    assert res.json()["isActive"] is True
    assert res.json()["startedAt"] is not None
    assert client.get(f"/api/pods/{pod['id']}/active-call").json()["id"] == call["id"]

    res = client.put(f"/api/video-calls/{call['id']}/status", json={"isActive": False}, headers=auth(host))
    assert res.json()["endedAt"] is not None
    assert client.get(f"/api/pods/{pod['id']}/active-call").json() is None


def test_join_and_leave_track_participants(client) -> None:
    host = create_user_via_api(client, "host@example.com")
    guest = create_user_via_api(client, "guest@example.com")
    pod = create_pod_via_api(client, host)
    call = create_call(client, pod, host)
    call_url = f"/api/video-calls/{call['id']}"

    res = client.post(f"{call_url}/join", headers=auth(host))
    assert res.status_code == 201
    assert res.json()["userId"] == host["id"]
    assert res.json()["leftAt"] is None
    assert client.post(f"{call_url}/join", headers=auth(guest)).status_code == 201
    assert client.post(f"{call_url}/join", headers=auth(guest)).status_code == 409

    calls = client.get(f"/api/pods/{pod['id']}/video-calls").json()
    assert calls[0]["participantCount"] == 2

    participants = client.get(f"{call_url}/participants").json()
    assert [p["user"]["firstName"] for p in participants] == ["guest", "host"]

    res = client.post(f"{call_url}/leave", headers=auth(guest))
    assert res.status_code == 200
    assert res.json() == {"message": "Left video call successfully"}
    assert client.post(f"{call_url}/leave", headers=auth(guest)).status_code == 404

    participants = client.get(f"{call_url}/participants").json()
    left = next(p for p in participants if p["userId"] == guest["id"])
    assert left["leftAt"] is not None
    assert left["duration"] == 0
    assert client.get(f"/api/pods/{pod['id']}/video-calls").json()[0]["participantCount"] == 1

    # Rejoining after leaving opens a new participation
    assert client.post(f"{call_url}/join", headers=auth(guest)).status_code == 201
    assert len(client.get(f"{call_url}/participants").json()) == 3


def test_full_call_rejects_new_participants(client) -> None:
    host = create_user_via_api(client, "host@example.com")
    pod = create_pod_via_api(client, host)
    call = create_call(client, pod, host, maxParticipants=2)
    first = create_user_via_api(client, "first@example.com")
    second = create_user_via_api(client, "second@example.com")

    assert client.post(f"/api/video-calls/{call['id']}/join", headers=auth(host)).status_code == 201
    assert client.post(f"/api/video-calls/{call['id']}/join", headers=auth(first)).status_code == 201
    res = client.post(f"/api/video-calls/{call['id']}/join", headers=auth(second))
    assert res.status_code == 409
    assert "2 participants" in res.json()["detail"]["message"]


def test_unknown_video_call_is_404(client) -> None:
    user = create_user_via_api(client, "someone@example.com")
    missing = uuid4()

    assert client.post(f"/api/video-calls/{missing}/join", headers=auth(user)).status_code == 404
    assert client.get(f"/api/video-calls/{missing}/participants").status_code == 404
