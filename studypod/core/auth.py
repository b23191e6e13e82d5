# studypod/core/auth.py
"""Current-user resolution.

Identity comes from the ``X-User-Id`` header. Session or OAuth login plugs
in here by replacing ``get_current_user``; routers only depend on it.
"""
from typing import Optional
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from .database import get_db
from .exceptions import NotAuthenticated, UserNotFound
from ..models.user import User


def _parse_user_id(raw: Optional[str]) -> UUID:
    if not raw:
        raise NotAuthenticated()
    try:
        return UUID(raw)
    except ValueError:
        raise NotAuthenticated("Invalid user id")


async def get_current_user(
    x_user_id: Optional[str] = Header(default=None),
    db: AsyncSession = Depends(get_db),
) -> User:
    user_id = _parse_user_id(x_user_id)
    user = await db.get(User, user_id)
    if user is None or user.is_deleted:
        raise UserNotFound()
    return user
