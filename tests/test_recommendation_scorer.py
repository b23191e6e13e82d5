from __future__ import annotations

import asyncio
import json

import pytest

from conftest import FakeGeminiClient
from studypod.core.config import settings
from studypod.core.error_handlers import AIServiceException
from studypod.models.study_pod import PodMembership
from studypod.schemas.pod_schemas import PodMatchScore
from studypod.services.ai.recommendation_service import FALLBACK_REASONS, RecommendationService
from studypod.services.ai.study_ai_service import MATCH_ERROR_REASON, StudyAIService

USER = {"subjects": ["Mathematics"], "learning_pace": "beginner", "availability": {"monday": ["18:00", "20:00"]}, "goals": ["Pass calculus"]}
POD = {"subject": "Mathematics", "learning_pace": "beginner", "schedule": {"days": ["monday"]}, "goal": "Finish the syllabus"}


def scorer(response) -> StudyAIService:
    return StudyAIService(client=FakeGeminiClient(response))


def assert_fallback(result: PodMatchScore) -> None:
    assert result.score == 0
    assert result.reasons == [MATCH_ERROR_REASON]
    assert result.compatibility.model_dump() == {
        "schedule_match": 0,
        "pace_match": 0,
        "subject_match": 0,
        "goal_alignment": 0,
    }


async def test_valid_response_is_parsed() -> None:
    payload = {"score": 86, "reasons": ["Same subject", "Same pace"], "compatibility": {"scheduleMatch": 70, "paceMatch": 100, "subjectMatch": 95, "goalAlignment": 80}}
    result = await scorer(json.dumps(payload)).calculate_pod_match(USER, POD)

    assert result.score == 86
    assert result.reasons == ["Same subject", "Same pace"]
    assert result.compatibility.pace_match == 100
    assert result.model_dump(by_alias=True)["compatibility"]["goalAlignment"] == 80


async def test_scores_are_clamped_to_range() -> None:
    payload = {"score": 140, "reasons": [], "compatibility": {"scheduleMatch": -20, "paceMatch": 100.4, "subjectMatch": 250}}
    result = await scorer(json.dumps(payload)).calculate_pod_match(USER, POD)

    assert result.score == 100
    assert result.compatibility.schedule_match == 0
    assert result.compatibility.pace_match == 100
    assert result.compatibility.subject_match == 100
    assert result.compatibility.goal_alignment == 0


async def test_json_wrapped_in_prose_is_extracted() -> None:
    text = 'Here you go:\n```json\n{"score": 55, "reasons": ["ok"], "compatibility": {}}\n```'
    result = await scorer(text).calculate_pod_match(USER, POD)

    assert result.score == 55


@pytest.mark.parametrize(
    "response",
    [
        AIServiceException("AI service timeout", status_code=504),
        "this is not json",
        "[1, 2, 3]",
        '"85"',
        '{"score": "high", "reasons": []}',
        '{"score": 70, "reasons": "great fit"}',
        '{"score": 70, "compatibility": [1, 2]}',
        '{"score": 70, "compatibility": {"paceMatch": "fast"}}',
        '{"score": true}',
    ],
)
async def test_failures_return_zero_score_fallback(response) -> None:
    assert_fallback(await scorer(response).calculate_pod_match(USER, POD))


async def test_missing_profile_fields_do_not_raise() -> None:
    client = FakeGeminiClient('{"score": 40, "reasons": ["Sparse profile"]}')
    result = await StudyAIService(client=client).calculate_pod_match({}, {"subject": "History"})

    assert result.score == 40
    assert "Subject: History" in client.prompts[0]


class ScriptedScorer:
    """calculate_pod_match keyed on the pod's goal"""

    def __init__(self, scores: dict, delay_for: str = "") -> None:
        self.scores = scores
        self.delay_for = delay_for

    async def calculate_pod_match(self, user_profile, pod_profile) -> PodMatchScore:
        goal = pod_profile["goal"]
        if goal == self.delay_for:
            await asyncio.sleep(5)
        score = self.scores[goal]
        if isinstance(score, Exception):
            raise score
        return PodMatchScore(score=score, reasons=[f"{goal} fits"])


async def test_recommendations_use_fallback_and_sort_by_score(db, make_user, make_pod) -> None:
    user = await make_user(preferred_subjects=["Mathematics"], learning_pace="beginner")
    await make_pod(goal="low", learning_pace="beginner")
    await make_pod(goal="broken", learning_pace="beginner")
    await make_pod(goal="high", learning_pace="beginner")

    service = RecommendationService(db, ScriptedScorer({"low": 30, "broken": RuntimeError("boom"), "high": 92}))
    recommendations = await service.get_recommendations(user, limit=5)

    assert [(r.goal, r.match_score) for r in recommendations] == [("high", 92), ("broken", 75), ("low", 30)]
    assert recommendations[1].match_reasons == FALLBACK_REASONS


async def test_slow_scoring_falls_back_to_default(db, make_user, make_pod, monkeypatch) -> None:
    monkeypatch.setattr(settings, "recommendation_timeout_seconds", 0.05)
    user = await make_user(preferred_subjects=["Mathematics"])
    await make_pod(goal="slow")

    service = RecommendationService(db, ScriptedScorer({"slow": 99}, delay_for="slow"))
    [recommendation] = await service.get_recommendations(user)

    assert recommendation.match_score == settings.recommendation_default_score
    assert recommendation.match_reasons == FALLBACK_REASONS


async def test_candidates_exclude_full_joined_inactive_and_other_subjects(db, make_user, make_pod) -> None:
    user = await make_user(preferred_subjects=["Mathematics"], learning_pace="beginner")
    open_pod = await make_pod(goal="open", learning_pace="beginner")
    await make_pod(goal="full", learning_pace="beginner", max_members=2, current_members=2)
    await make_pod(goal="inactive", learning_pace="beginner", is_active=False)
    await make_pod(goal="history", subject="History", learning_pace="beginner")
    await make_pod(goal="advanced", learning_pace="advanced")
    joined = await make_pod(goal="joined", learning_pace="beginner")
    db.add(PodMembership(user_id=user.id, pod_id=joined.id))
    await db.commit()

    candidates = await RecommendationService(db, ScriptedScorer({})).get_candidate_pods(user, limit=10)

    assert [pod.id for pod in candidates] == [open_pod.id]


async def test_user_without_preferences_sees_all_open_pods(db, make_user, make_pod) -> None:
    user = await make_user()
    await make_pod(goal="a", subject="History")
    await make_pod(goal="b", learning_pace="advanced")

    candidates = await RecommendationService(db, ScriptedScorer({})).get_candidate_pods(user, limit=10)

    assert {pod.goal for pod in candidates} == {"a", "b"}


async def test_numeric_strings_are_accepted_as_scores() -> None:
    payload = {"score": "85", "reasons": ["Quoted numbers"], "compatibility": {"paceMatch": " 120 ", "subjectMatch": "90.6"}}
    result = await scorer(json.dumps(payload)).calculate_pod_match(USER, POD)

    assert result.score == 85
    assert result.compatibility.pace_match == 100
    assert result.compatibility.subject_match == 91
