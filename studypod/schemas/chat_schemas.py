# studypod/schemas/chat_schemas.py
"""Chat message schemas shared by the HTTP history API and the WebSocket events."""
from typing import Any, Dict, Optional
from datetime import datetime
from uuid import UUID
from pydantic import Field

from .base import CamelModel
from .user_schemas import UserSummary


class SendMessageRequest(CamelModel):
    content: str = Field(..., min_length=1, max_length=4000)
    message_type: str = Field(default="text", pattern="^(text|file)$")
    metadata: Optional[Dict[str, Any]] = None


class ChatMessageOut(CamelModel):
    id: int
    pod_id: UUID
    user_id: UUID
    content: str
    message_type: str
    message_metadata: Optional[Dict[str, Any]] = Field(default=None, alias="metadata")
    created_at: datetime
    user: Optional[UserSummary] = None

    @classmethod
    def from_model(cls, message, user=None) -> "ChatMessageOut":
        """Build from an ORM row; ``user`` is passed explicitly to avoid lazy loads."""
        return cls(
            id=message.id,
            pod_id=message.pod_id,
            user_id=message.user_id,
            content=message.content,
            message_type=message.message_type,
            message_metadata=message.message_metadata,
            created_at=message.created_at,
            user=UserSummary.model_validate(user) if user is not None else None,
        )
