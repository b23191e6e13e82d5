# studypod/services/ai/study_ai_service.py
"""Gemini-backed study assistant: pod matching, study plans, Q&A, tips and chat moderation.

Each operation decides for itself whether a provider failure is recoverable:
matching, tips and moderation fall back to fixed answers; study plans and
questions are explicit user requests, so their failures are raised.
"""
import json
import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ...core.error_handlers import AIServiceException
from ...schemas.ai_schemas import ModerationResult, StudyRecommendation
from ...schemas.pod_schemas import CompatibilityBreakdown, PodMatchScore
from .gemini_client import GeminiClient

logger = logging.getLogger(__name__)

MATCH_ERROR_REASON = "Error calculating compatibility"
DEFAULT_ANSWER = "I'm sorry, I couldn't generate a response to your question."
DEFAULT_TIP = "Keep practicing regularly and don't hesitate to ask questions when you need help!"
FALLBACK_TIP = "Stay consistent with your studies and break complex topics into smaller, manageable parts."

_SUB_SCORES = {
    "schedule_match": "scheduleMatch",
    "pace_match": "paceMatch",
    "subject_match": "subjectMatch",
    "goal_alignment": "goalAlignment",
}


def _extract_json_object(text: str) -> Dict[str, Any]:
    """Parse model output into a JSON object, tolerating prose or code fences around it."""
    text = (text or "").strip()
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        start = text.find('{')
        end = text.rfind('}') + 1
        if start == -1 or end == 0:
            raise ValueError("No JSON object in AI response")
        parsed = json.loads(text[start:end])

    if not isinstance(parsed, dict):
        raise ValueError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def _clamp_score(value: Any) -> int:
    if value is None:
        return 0
    # Models sometimes quote numbers: "85"
    if isinstance(value, str):
        value = float(value.strip())
    # bool is an int subclass but never a meaningful score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Non-numeric score: {value!r}")
    return max(0, min(100, int(round(value))))


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _fallback_match() -> PodMatchScore:
    return PodMatchScore(score=0, reasons=[MATCH_ERROR_REASON], compatibility=CompatibilityBreakdown())


class StudyAIService:
    def __init__(self, client: Optional[GeminiClient] = None):
        self.client = client or GeminiClient()

    async def calculate_pod_match(self, user_profile: Dict[str, Any], pod_profile: Dict[str, Any]) -> PodMatchScore:
        """Score how well a student fits a pod. Never raises."""
        try:
            subjects = [str(s) for s in _as_list(user_profile.get("subjects"))]
            goals = [str(g) for g in _as_list(user_profile.get("goals"))]
            prompt = f"""Calculate compatibility score between a student and study pod:

Student Profile:
- Subjects: {", ".join(subjects)}
- Learning Pace: {user_profile.get("learning_pace") or ""}
- Availability: {json.dumps(user_profile.get("availability") or {})}
- Goals: {", ".join(goals)}

Pod Profile:
- Subject: {pod_profile.get("subject") or ""}
- Learning Pace: {pod_profile.get("learning_pace") or ""}
- Schedule: {json.dumps(pod_profile.get("schedule") or {})}
- Goal: {pod_profile.get("goal") or ""}

Calculate detailed compatibility scores and provide an overall match score (0-100).
Include specific reasons for the score and breakdown by category.

Respond with JSON format containing:
- score (number 0-100)
- reasons (array of strings)
- compatibility (object with scheduleMatch, paceMatch, subjectMatch, goalAlignment scores 0-100)

Format: {{"score": 85, "reasons": ["..."], "compatibility": {{"scheduleMatch": 80, "paceMatch": 90, "subjectMatch": 85, "goalAlignment": 88}}}}"""

            data = _extract_json_object(await self.client.generate(prompt, json_mode=True))

            compatibility = data.get("compatibility") or {}
            if not isinstance(compatibility, dict):
                raise ValueError("compatibility is not an object")
            reasons = data.get("reasons") or []
            if not isinstance(reasons, list):
                raise ValueError("reasons is not an array")

            return PodMatchScore(
                score=_clamp_score(data.get("score")),
                reasons=[str(reason) for reason in reasons],
                compatibility=CompatibilityBreakdown(**{
                    field: _clamp_score(compatibility.get(key))
                    for field, key in _SUB_SCORES.items()
                }),
            )
        except Exception as e:
            logger.error(f"Error calculating pod match: {e}")
            return _fallback_match()

    async def generate_study_plan(
        self,
        subject: str,
        learning_pace: str,
        goals: List[str],
        time_available: int,
    ) -> List[StudyRecommendation]:
        prompt = f"""Generate a personalized study plan for a {learning_pace} level student studying {subject}.
Goals: {", ".join(goals)}
Available time: {time_available} hours per week

Provide a structured study plan with topics, difficulty levels, estimated time, resources, and practical tips.

Respond with JSON format containing an array of study recommendations with fields:
- topic (string)
- difficulty (beginner/intermediate/advanced)
- estimatedTime (number in minutes)
- resources (array of strings)
- tips (array of strings)

Format: {{"recommendations": [{{"topic": "...", "difficulty": "...", "estimatedTime": 60, "resources": ["..."], "tips": ["..."]}}]}}"""

        try:
            data = _extract_json_object(await self.client.generate(prompt, json_mode=True))
        except (AIServiceException, ValueError) as e:
            logger.error(f"Error generating study plan: {e}")
            raise AIServiceException("Failed to generate study plan", status_code=500)

        recommendations = []
        for item in _as_list(data.get("recommendations")):
            try:
                recommendations.append(StudyRecommendation.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping malformed study recommendation: {e.errors()}")
        return recommendations

    async def answer_study_question(
        self,
        question: str,
        subject: Optional[str] = None,
        context: Optional[str] = None,
    ) -> str:
        lines = [
            "You are an expert AI tutor that helps students with academic questions.",
            "Provide clear, educational answers that help students understand concepts rather than just giving answers.",
        ]
        if subject:
            lines.append(f"Focus on {subject} topics.")
        if context:
            lines.append(f"Additional context: {context}")
        lines.append("")
        lines.append(f"Question: {question}")

        try:
            text = await self.client.generate("\n".join(lines))
        except AIServiceException as e:
            logger.error(f"Error answering study question: {e.message}")
            raise AIServiceException("Failed to generate AI response", status_code=500)
        return text.strip() or DEFAULT_ANSWER

    async def generate_study_tip(self, subject: str, learning_pace: str, recent_topics: List[str]) -> str:
        prompt = f"""Generate a helpful study tip for a {learning_pace} level student studying {subject}.
Recent topics they've been working on: {", ".join(recent_topics)}

Make the tip practical, actionable, and relevant to their current studies.
Keep the response under 100 words and focus on actionable advice."""

        try:
            text = await self.client.generate(prompt)
        except AIServiceException as e:
            logger.error(f"Error generating study tip: {e.message}")
            return FALLBACK_TIP
        return text.strip() or DEFAULT_TIP

    async def moderate_chat_message(self, message: str) -> ModerationResult:
        """Lenient moderation; anything short of a clear verdict allows the message"""
        prompt = f"""Analyze this chat message for harmful content in a study group chat:

Message: {json.dumps(message)}

ONLY mark as inappropriate if the message contains:
- Explicit hate speech or slurs
- Serious harassment or threats
- Explicit sexual content
- Spam or dangerous links
- Bullying or personal attacks

Allow:
- Casual conversation and friendly chat
- Study-related discussions
- Mild frustration or casual language
- Off-topic but harmless conversations
- Questions and general comments

Be very lenient - only block truly harmful content.

Respond with JSON format:
{{"isAppropriate": true, "reason": "", "suggestedEdit": ""}}"""

        try:
            data = _extract_json_object(await self.client.generate(prompt, json_mode=True))
        except (AIServiceException, ValueError) as e:
            logger.error(f"Error moderating chat message: {e}")
            return ModerationResult(is_appropriate=True)

        return ModerationResult(
            # Only an explicit false blocks the message
            is_appropriate=data.get("isAppropriate") is not False,
            reason=str(data["reason"]) if data.get("reason") else None,
            suggested_edit=str(data["suggestedEdit"]) if data.get("suggestedEdit") else None,
        )


@lru_cache()
def get_ai_service() -> StudyAIService:
    return StudyAIService()
