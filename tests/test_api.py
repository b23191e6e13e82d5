from __future__ import annotations

from uuid import uuid4

from conftest import auth, create_pod_via_api, create_user_via_api
from studypod.core.error_handlers import AIServiceException


def test_health_endpoints(client) -> None:
    assert client.get("/health/").json()["status"] == "healthy"
    realtime = client.get("/health/realtime").json()
    assert realtime["rooms"] == 0
    assert realtime["activeConnections"] == 0


def test_process_time_header_is_set(client) -> None:
    res = client.get("/health/")
    assert "x-process-time" in res.headers


def test_create_user_and_duplicate_email(client) -> None:
    user = create_user_via_api(client, "ada@example.com")
    assert user["email"] == "ada@example.com"
    assert user["studyGoals"] == []

    res = client.post("/api/users", json={"email": "ADA@example.com"})
    assert res.status_code == 409
    assert res.json()["detail"]["field"] == "email"


def test_profile_requires_known_user(client) -> None:
    assert client.get("/api/profile").status_code == 401
    assert client.get("/api/profile", headers={"X-User-Id": "nope"}).status_code == 401
    assert client.get("/api/profile", headers={"X-User-Id": str(uuid4())}).status_code == 404


def test_update_profile_is_partial(client) -> None:
    user = create_user_via_api(client, "grace@example.com")

    res = client.put(
        "/api/profile",
        json={"preferredSubjects": ["Physics"], "learningPace": "Advanced", "githubId": "grace"},
        headers=auth(user),
    )
    assert res.status_code == 200
    body = res.json()
    assert body["preferredSubjects"] == ["Physics"]
    assert body["learningPace"] == "advanced"
    assert body["firstName"] == "grace"

    res = client.put("/api/profile", json={"learningPace": "warp speed"}, headers=auth(user))
    assert res.status_code == 422


def test_create_pod_makes_creator_a_member(client) -> None:
    owner = create_user_via_api(client, "owner@example.com")
    pod = create_pod_via_api(client, owner, learningPace="beginner", maxMembers=4)

    assert pod["currentMembers"] == 1
    assert pod["creatorId"] == owner["id"]

    members = client.get(f"/api/pods/{pod['id']}/members").json()
    assert [(m["userId"], m["role"]) for m in members] == [(owner["id"], "creator")]

    my_pods = client.get("/api/my-pods", headers=auth(owner)).json()
    assert my_pods[0]["pod"]["name"] == "Calculus Crew"


def test_join_pod_rules(client) -> None:
    owner = create_user_via_api(client, "owner@example.com")
    guest = create_user_via_api(client, "guest@example.com")
    late = create_user_via_api(client, "late@example.com")
    pod = create_pod_via_api(client, owner, maxMembers=2)

    res = client.post(f"/api/pods/{pod['id']}/join", headers=auth(guest))
    assert res.status_code == 201
    assert res.json()["role"] == "member"

    assert client.post(f"/api/pods/{pod['id']}/join", headers=auth(guest)).status_code == 409
    res = client.post(f"/api/pods/{pod['id']}/join", headers=auth(late))
    assert res.status_code == 409
    assert res.json()["detail"]["error"] == "Pod full"
    assert client.get(f"/api/pods/{pod['id']}").json()["currentMembers"] == 2

    assert client.post(f"/api/pods/{uuid4()}/join", headers=auth(guest)).status_code == 404


def test_list_pods_filters(client) -> None:
    owner = create_user_via_api(client, "owner@example.com")
    create_pod_via_api(client, owner, name="Algebra", learningPace="beginner")
    create_pod_via_api(client, owner, name="WW2", subject="History")

    names = [p["name"] for p in client.get("/api/pods", params={"subject": "History"}).json()]
    assert names == ["WW2"]
    names = [p["name"] for p in client.get("/api/pods", params={"learningPace": "beginner"}).json()]
    assert names == ["Algebra"]
    assert client.get(f"/api/pods/{uuid4()}").status_code == 404


def test_recommendations_are_scored(client) -> None:
    owner = create_user_via_api(client, "owner@example.com")
    seeker = create_user_via_api(client, "seeker@example.com", preferredSubjects=["Mathematics"])
    create_pod_via_api(client, owner)

    res = client.get("/api/recommendations", headers=auth(seeker))
    assert res.status_code == 200
    [rec] = res.json()
    assert rec["matchScore"] == 80
    assert rec["matchReasons"] == ["Same subject"]

    # The owner already belongs to the only pod
    assert client.get("/api/recommendations", headers=auth(owner)).json() == []


def test_sessions_and_attendance(client) -> None:
    owner = create_user_via_api(client, "owner@example.com")
    pod = create_pod_via_api(client, owner)

    res = client.post(
        "/api/sessions",
        json={"podId": pod["id"], "title": "Limits", "scheduledAt": "2099-01-01T18:00:00Z", "duration": 90},
        headers=auth(owner),
    )
    assert res.status_code == 201
    session = res.json()
    client.post(
        "/api/sessions",
        json={"podId": pod["id"], "title": "Past", "scheduledAt": "2001-01-01T18:00:00Z", "duration": 30},
        headers=auth(owner),
    )

    upcoming = client.get("/api/upcoming-sessions", headers=auth(owner)).json()
    assert [s["title"] for s in upcoming] == ["Limits"]
    assert upcoming[0]["pod"]["id"] == pod["id"]

    res = client.post(f"/api/sessions/{session['id']}/attend", json={"studyTimeMinutes": 45}, headers=auth(owner))
    assert res.status_code == 201
    assert client.get("/api/profile", headers=auth(owner)).json()["totalStudyTime"] == 45

    assert client.post(f"/api/sessions/{uuid4()}/attend", json={}, headers=auth(owner)).status_code == 404


def test_pod_files(client) -> None:
    owner = create_user_via_api(client, "owner@example.com")
    other = create_user_via_api(client, "other@example.com")
    pod = create_pod_via_api(client, owner)

    res = client.post(
        f"/api/pods/{pod['id']}/files",
        json={"fileName": "notes.pdf", "fileType": "pdf", "fileUrl": "https://files.example.com/notes.pdf"},
        headers=auth(owner),
    )
    assert res.status_code == 201
    file_id = res.json()["id"]

    assert client.post(f"/api/files/{file_id}/download").json() == {"success": True}
    [listed] = client.get(f"/api/pods/{pod['id']}/files").json()
    assert listed["downloadCount"] == 1
    assert listed["uploader"]["id"] == owner["id"]

    assert client.delete(f"/api/files/{file_id}", headers=auth(other)).status_code == 404
    assert client.delete(f"/api/files/{file_id}", headers=auth(owner)).status_code == 204
    assert client.get(f"/api/pods/{pod['id']}/files").json() == []


def test_badges_empty_by_default(client) -> None:
    user = create_user_via_api(client, "new@example.com")
    assert client.get("/api/badges", headers=auth(user)).json() == []


def test_ai_ask_records_history(client) -> None:
    user = create_user_via_api(client, "curious@example.com")

    assert client.post("/api/ai/ask", json={"question": "  "}, headers=auth(user)).status_code == 400

    res = client.post("/api/ai/ask", json={"question": "What is a limit?", "subject": "Calculus"}, headers=auth(user))
    assert res.status_code == 200
    assert res.json()["response"] == "Break the problem into smaller steps."

    [interaction] = client.get("/api/ai/history", headers=auth(user)).json()
    assert interaction["question"] == "What is a limit?"
    assert interaction["context"] == "Calculus"


def test_ai_study_plan(client) -> None:
    user = create_user_via_api(client, "planner@example.com")
    res = client.post("/api/ai/study-plan", json={"subject": "Calculus", "timeAvailable": 6}, headers=auth(user))

    assert res.status_code == 200
    [item] = res.json()["studyPlan"]
    assert item["topic"] == "Limits"
    assert item["estimatedTime"] == 45


def test_ai_failures(client, fake_ai_client) -> None:
    user = create_user_via_api(client, "unlucky@example.com", preferredSubjects=["Chemistry"])
    fake_ai_client.response = AIServiceException("AI service timeout", status_code=504)

    tip = client.get("/api/ai/study-tip", headers=auth(user)).json()
    assert tip["subject"] == "Chemistry"
    assert tip["tip"].startswith("Stay consistent")

    res = client.post("/api/ai/study-plan", json={"subject": "Chemistry"}, headers=auth(user))
    assert res.status_code == 500
    assert res.json()["error"] == "Failed to generate study plan"

    res = client.post("/api/ai/ask", json={"question": "Why?"}, headers=auth(user))
    assert res.status_code == 500
    assert client.get("/api/ai/history", headers=auth(user)).json() == []


def test_post_and_read_pod_messages(client) -> None:
    owner = create_user_via_api(client, "owner@example.com")
    pod = create_pod_via_api(client, owner)

    for content in ("first", "second"):
        res = client.post(f"/api/pods/{pod['id']}/messages", json={"content": content}, headers=auth(owner))
        assert res.status_code == 201
    body = res.json()
    assert isinstance(body["id"], int)
    assert body["messageType"] == "text"
    assert body["user"]["firstName"] == "owner"

    history = client.get(f"/api/pods/{pod['id']}/messages").json()
    assert [m["content"] for m in history] == ["second", "first"]
    assert [m["content"] for m in client.get(f"/api/pods/{pod['id']}/messages", params={"limit": 1}).json()] == ["second"]

    assert client.get(f"/api/pods/{pod['id']}/messages", params={"limit": 101}).status_code == 422
    assert client.get(f"/api/pods/{uuid4()}/messages").status_code == 404
    res = client.post(f"/api/pods/{uuid4()}/messages", json={"content": "hi"}, headers=auth(owner))
    assert res.status_code == 404


def test_rejected_message_returns_reason(client, fake_ai_client) -> None:
    owner = create_user_via_api(client, "owner@example.com")
    pod = create_pod_via_api(client, owner)
    fake_ai_client.response = '{"isAppropriate": false, "reason": "Spam link", "suggestedEdit": "Remove the link"}'

    res = client.post(f"/api/pods/{pod['id']}/messages", json={"content": "buy now http://x"}, headers=auth(owner))

    assert res.status_code == 400
    detail = res.json()["detail"]
    assert detail["reason"] == "Spam link"
    assert detail["suggestedEdit"] == "Remove the link"
    assert client.get(f"/api/pods/{pod['id']}/messages").json() == []


def test_empty_message_is_invalid(client) -> None:
    owner = create_user_via_api(client, "owner@example.com")
    pod = create_pod_via_api(client, owner)

    res = client.post(f"/api/pods/{pod['id']}/messages", json={"content": ""}, headers=auth(owner))
    assert res.status_code == 422
