# studypod/services/ai/recommendation_service.py
import asyncio
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.config import settings
from ...models.study_pod import StudyPod, PodMembership
from ...models.user import User
from ...schemas.pod_schemas import PodRecommendation, StudyPodOut
from .study_ai_service import StudyAIService

logger = logging.getLogger(__name__)

DEFAULT_PACE = "intermediate"
FALLBACK_REASONS = ["Compatible learning pace and subject"]

class RecommendationService:
    def __init__(self, db: AsyncSession, ai_service: StudyAIService):
        self.db = db
        self.ai_service = ai_service

    async def get_candidate_pods(self, user: User, limit: int = 5) -> List[StudyPod]:
        """Active pods with a free seat that the user has not joined, narrowed by their preferences"""
        joined = select(PodMembership.pod_id).where(PodMembership.user_id == user.id)

        stmt = select(StudyPod).where(
            StudyPod.is_active == True,
            StudyPod.is_deleted == False,
            StudyPod.current_members < StudyPod.max_members,
            StudyPod.id.not_in(joined),
        )
        if user.preferred_subjects:
            stmt = stmt.where(StudyPod.subject.in_(user.preferred_subjects))
        if user.learning_pace:
            stmt = stmt.where(StudyPod.learning_pace == user.learning_pace)

        stmt = stmt.order_by(StudyPod.created_at.desc()).limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_recommendations(self, user: User, limit: int = 5) -> List[PodRecommendation]:
        """Candidate pods scored concurrently, best match first"""
        pods = await self.get_candidate_pods(user, limit)
        if not pods:
            return []

        user_profile = {
            "subjects": user.preferred_subjects or [],
            "learning_pace": user.learning_pace or DEFAULT_PACE,
            "availability": user.availability or {},
            "goals": user.study_goals or [],
        }
        scored = await asyncio.gather(*(self._score_pod(user_profile, pod) for pod in pods))
        # sorted() is stable, so equal scores keep candidate order
        return sorted(scored, key=lambda rec: rec.match_score, reverse=True)

    async def _score_pod(self, user_profile: Dict[str, Any], pod: StudyPod) -> PodRecommendation:
        pod_out = StudyPodOut.model_validate(pod).model_dump()
        pod_profile = {
            "subject": pod.subject,
            "learning_pace": pod.learning_pace or DEFAULT_PACE,
            "schedule": pod.schedule or {},
            "goal": pod.goal or "",
        }

        try:
            match = await asyncio.wait_for(
                self.ai_service.calculate_pod_match(user_profile, pod_profile),
                timeout=self._timeout(),
            )
            return PodRecommendation(**pod_out, match_score=match.score, match_reasons=match.reasons)
        except Exception as e:
            logger.error(f"Error calculating match score for pod {pod.id}: {e!r}")
            return PodRecommendation(
                **pod_out,
                match_score=settings.recommendation_default_score,
                match_reasons=list(FALLBACK_REASONS),
            )

    def _timeout(self) -> Optional[float]:
        return settings.recommendation_timeout_seconds or None
