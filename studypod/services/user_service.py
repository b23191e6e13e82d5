# studypod/services/user_service.py
from typing import Optional
from uuid import UUID
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .base_service import BaseService
from ..core.exceptions import DuplicateUserError, UserNotFound
from ..models.user import User
from ..schemas.user_schemas import ProfileUpdate, UserCreate

logger = logging.getLogger(__name__)

class UserService(BaseService[User]):
    not_found_exception = UserNotFound

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.strip().lower(), User.is_deleted == False)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def create_user(self, user_in: UserCreate) -> User:
        """Provision a profile; emails are unique"""
        if await self.get_by_email(user_in.email):
            raise DuplicateUserError(user_in.email)

        data = user_in.model_dump()
        data["email"] = data["email"].strip().lower()
        user = await self.create(data)
        logger.info(f"Created user {user.id}")
        return user

    async def update_profile(self, user_id: UUID, profile: ProfileUpdate) -> User:
        """Apply only the fields the client sent"""
        changes = profile.model_dump(exclude_unset=True)
        user = await self.update(user_id, changes)
        if user is None:
            raise UserNotFound()
        return user

    async def add_study_time(self, user: User, minutes: int) -> None:
        """Credit study minutes; the caller commits"""
        user.total_study_time = (user.total_study_time or 0) + minutes
