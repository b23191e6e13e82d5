# studypod/services/video_call_service.py
from typing import List, Optional
from uuid import UUID
from datetime import timezone
import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from .base_service import BaseService
from ..core.exceptions import (
    AlreadyInCallError,
    NotCallHost,
    NotInVideoCall,
    PodNotFound,
    VideoCallFullError,
    VideoCallNotFound,
)
from ..models.base import utcnow
from ..models.study_pod import StudyPod
from ..models.video_call import VideoCallSession, VideoCallParticipant
from ..schemas.video_call_schemas import VideoCallCreate

logger = logging.getLogger(__name__)

class VideoCallService(BaseService[VideoCallSession]):
    not_found_exception = VideoCallNotFound

    def __init__(self, db: AsyncSession):
        super().__init__(VideoCallSession, db)

    async def create_call(self, pod_id: UUID, host_id: UUID, call_in: VideoCallCreate) -> VideoCallSession:
        pod = await self.db.get(StudyPod, pod_id)
        if pod is None or pod.is_deleted:
            raise PodNotFound()
        call = await self.create({**call_in.model_dump(), "pod_id": pod_id, "host_id": host_id})
        logger.info(f"User {host_id} scheduled video call {call.id} in pod {pod_id}")
        return call

    async def get_pod_calls(self, pod_id: UUID) -> List[VideoCallSession]:
        return await self.get_multi(pod_id=pod_id, order_by="created_at", sort="desc")

    async def get_active_call(self, pod_id: UUID) -> Optional[VideoCallSession]:
        calls = await self.get_multi(limit=1, pod_id=pod_id, is_active=True, order_by="started_at", sort="desc")
        return calls[0] if calls else None

    async def _open_participation(self, call_id: UUID, user_id: UUID) -> Optional[VideoCallParticipant]:
        stmt = select(VideoCallParticipant).where(
            VideoCallParticipant.session_id == call_id,
            VideoCallParticipant.user_id == user_id,
            VideoCallParticipant.left_at.is_(None),
            VideoCallParticipant.is_deleted == False,
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def join_call(self, call_id: UUID, user_id: UUID) -> VideoCallParticipant:
        call = await self.get_or_404(call_id)
        max_participants = call.max_participants
        if await self._open_participation(call_id, user_id):
            raise AlreadyInCallError()

        # Same guarded increment as pod membership
        stmt = (
            update(VideoCallSession)
            .where(
                VideoCallSession.id == call_id,
                VideoCallSession.participant_count < VideoCallSession.max_participants,
            )
            .values(participant_count=VideoCallSession.participant_count + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        if result.rowcount == 0:
            await self.db.rollback()
            raise VideoCallFullError(max_participants)

        participant = VideoCallParticipant(session_id=call_id, user_id=user_id, joined_at=utcnow())
        self.db.add(participant)
        await self.db.commit()
        await self.db.refresh(participant)
        logger.info(f"User {user_id} joined video call {call_id}")
        return participant

    async def leave_call(self, call_id: UUID, user_id: UUID) -> VideoCallParticipant:
        await self.get_or_404(call_id)
        participant = await self._open_participation(call_id, user_id)
        if participant is None:
            raise NotInVideoCall()

        left_at = utcnow()
        joined_at = participant.joined_at
        if joined_at.tzinfo is None:
            joined_at = joined_at.replace(tzinfo=timezone.utc)
        participant.left_at = left_at
        participant.duration = int((left_at - joined_at).total_seconds() // 60)

        stmt = (
            update(VideoCallSession)
            .where(VideoCallSession.id == call_id, VideoCallSession.participant_count > 0)
            .values(participant_count=VideoCallSession.participant_count - 1)
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(stmt)
        await self.db.commit()
        logger.info(f"User {user_id} left video call {call_id} after {participant.duration} min")
        return participant

    async def update_status(self, call_id: UUID, user_id: UUID, is_active: bool) -> VideoCallSession:
        """Start or end a call; only its host may do either"""
        call = await self.get_or_404(call_id)
        if call.host_id != user_id:
            raise NotCallHost()

        call.is_active = is_active
        if is_active:
            call.started_at = utcnow()
        else:
            call.ended_at = utcnow()
        await self.db.commit()
        await self.db.refresh(call)
        return call

    async def get_participants(self, call_id: UUID) -> List[VideoCallParticipant]:
        await self.get_or_404(call_id)
        stmt = (
            select(VideoCallParticipant)
            .options(joinedload(VideoCallParticipant.user))
            .where(VideoCallParticipant.session_id == call_id, VideoCallParticipant.is_deleted == False)
            .order_by(VideoCallParticipant.joined_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
