from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import get_current_user
from ..core.database import get_db
from ..models.user import User
from ..schemas.badge_schemas import UserBadgeOut
from ..services.badge_service import BadgeService

router = APIRouter(prefix="/api", tags=["Badges"])

@router.get("/badges", response_model=List[UserBadgeOut])
async def get_user_badges(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = BadgeService(db)
    return await service.get_user_badges(current_user.id)
