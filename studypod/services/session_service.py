# studypod/services/session_service.py
from typing import List
from uuid import UUID
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from .base_service import BaseService
from ..core.exceptions import PodNotFound, SessionNotFound
from ..models.base import utcnow
from ..models.study_pod import StudyPod, PodMembership
from ..models.study_session import StudySession, SessionAttendance
from ..models.user import User
from ..schemas.session_schemas import StudySessionCreate

logger = logging.getLogger(__name__)

UPCOMING_LIMIT = 10

class SessionService(BaseService[StudySession]):
    not_found_exception = SessionNotFound

    def __init__(self, db: AsyncSession):
        super().__init__(StudySession, db)

    async def create_session(self, session_in: StudySessionCreate) -> StudySession:
        pod = await self.db.get(StudyPod, session_in.pod_id)
        if pod is None or pod.is_deleted:
            raise PodNotFound()
        return await self.create(session_in.model_dump())

    async def get_upcoming_sessions(self, user_id: UUID, limit: int = UPCOMING_LIMIT) -> List[StudySession]:
        """Future sessions in the user's pods, soonest first"""
        stmt = (
            select(StudySession)
            .options(joinedload(StudySession.pod))
            .join(PodMembership, PodMembership.pod_id == StudySession.pod_id)
            .where(
                PodMembership.user_id == user_id,
                PodMembership.is_deleted == False,
                StudySession.is_deleted == False,
                StudySession.is_completed == False,
                StudySession.scheduled_at > utcnow(),
            )
            .order_by(StudySession.scheduled_at)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().unique().all())

    async def mark_attendance(self, session_id: UUID, user: User, study_time_minutes: int = 0) -> SessionAttendance:
        session = await self.get_or_404(session_id)

        attendance = SessionAttendance(
            session_id=session.id,
            user_id=user.id,
            study_time_minutes=study_time_minutes,
        )
        self.db.add(attendance)
        session.attendee_count = (session.attendee_count or 0) + 1
        user.total_study_time = (user.total_study_time or 0) + study_time_minutes

        await self.db.commit()
        await self.db.refresh(attendance)
        logger.info(f"User {user.id} attended session {session_id} ({study_time_minutes} min)")
        return attendance
