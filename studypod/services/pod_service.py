# studypod/services/pod_service.py
from typing import List, Optional
from uuid import UUID
import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from .base_service import BaseService
from ..core.exceptions import AlreadyMemberError, PodFullError, PodNotFound
from ..models.study_pod import StudyPod, PodMembership
from ..models.user import User
from ..schemas.pod_schemas import StudyPodCreate

logger = logging.getLogger(__name__)

class PodService(BaseService[StudyPod]):
    not_found_exception = PodNotFound

    def __init__(self, db: AsyncSession):
        super().__init__(StudyPod, db)

    async def create_pod(self, pod_in: StudyPodCreate, creator: User) -> StudyPod:
        """Create a pod with its creator as the first member"""
        pod = StudyPod(**pod_in.model_dump(), creator_id=creator.id, current_members=1)
        self.db.add(pod)
        await self.db.flush()

        self.db.add(PodMembership(user_id=creator.id, pod_id=pod.id, role="creator"))
        await self.db.commit()
        await self.db.refresh(pod)
        logger.info(f"User {creator.id} created pod {pod.id}")
        return pod

    async def list_pods(
        self,
        subject: Optional[str] = None,
        learning_pace: Optional[str] = None,
        limit: int = 50,
    ) -> List[StudyPod]:
        """Active pods, newest first"""
        return await self.get_multi(
            limit=limit,
            order_by="created_at",
            sort="desc",
            is_active=True,
            subject=subject,
            learning_pace=learning_pace,
        )

    async def get_membership(self, pod_id: UUID, user_id: UUID) -> Optional[PodMembership]:
        stmt = select(PodMembership).where(
            PodMembership.pod_id == pod_id,
            PodMembership.user_id == user_id,
            PodMembership.is_deleted == False,
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def join_pod(self, pod_id: UUID, user: User) -> PodMembership:
        pod = await self.get_or_404(pod_id)
        if not pod.is_active:
            raise PodNotFound()
        max_members = pod.max_members
        if await self.get_membership(pod_id, user.id):
            raise AlreadyMemberError()

        # Conditional increment so two concurrent joins cannot overfill the pod
        stmt = (
            update(StudyPod)
            .where(StudyPod.id == pod_id, StudyPod.current_members < StudyPod.max_members)
            .values(current_members=StudyPod.current_members + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        if result.rowcount == 0:
            await self.db.rollback()
            raise PodFullError(max_members)

        membership = PodMembership(user_id=user.id, pod_id=pod_id, role="member")
        self.db.add(membership)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise AlreadyMemberError()

        await self.db.refresh(membership)
        logger.info(f"User {user.id} joined pod {pod_id}")
        return membership

    async def get_pod_members(self, pod_id: UUID) -> List[PodMembership]:
        await self.get_or_404(pod_id)
        stmt = (
            select(PodMembership)
            .options(joinedload(PodMembership.user))
            .where(PodMembership.pod_id == pod_id, PodMembership.is_deleted == False)
            .order_by(PodMembership.joined_at)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_user_pods(self, user_id: UUID) -> List[PodMembership]:
        stmt = (
            select(PodMembership)
            .options(joinedload(PodMembership.pod))
            .join(StudyPod, StudyPod.id == PodMembership.pod_id)
            .where(
                PodMembership.user_id == user_id,
                PodMembership.is_deleted == False,
                StudyPod.is_deleted == False,
            )
            .order_by(PodMembership.joined_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
