# studypod/schemas/badge_schemas.py
from typing import Any, Dict, Optional
from datetime import datetime
from uuid import UUID

from .base import CamelModel


class BadgeOut(CamelModel):
    id: UUID
    name: str
    description: Optional[str] = None
    icon: str
    category: Optional[str] = None
    requirements: Optional[Dict[str, Any]] = None


class UserBadgeOut(CamelModel):
    id: UUID
    user_id: UUID
    badge_id: UUID
    earned_at: datetime
    progress: Optional[Dict[str, Any]] = None
    badge: BadgeOut
