# studypod/services/badge_service.py
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from .base_service import BaseService
from ..core.exceptions import ValidationError
from ..models.badge import Badge, UserBadge

class BadgeService(BaseService[Badge]):
    def __init__(self, db: AsyncSession):
        super().__init__(Badge, db)

    async def get_user_badges(self, user_id: UUID) -> List[UserBadge]:
        """Earned badges, newest first"""
        stmt = (
            select(UserBadge)
            .options(joinedload(UserBadge.badge))
            .where(UserBadge.user_id == user_id, UserBadge.is_deleted == False)
            .order_by(UserBadge.earned_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def award_badge(
        self,
        user_id: UUID,
        badge_id: UUID,
        progress: Optional[Dict[str, Any]] = None,
    ) -> UserBadge:
        badge = await self.get(badge_id)
        if badge is None:
            raise ValidationError("Unknown badge", field="badgeId")

        user_badge = UserBadge(user_id=user_id, badge_id=badge.id, progress=progress)
        self.db.add(user_badge)
        await self.db.commit()
        await self.db.refresh(user_badge)
        return user_badge
