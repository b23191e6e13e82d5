# studypod/schemas/chat_events.py
"""WebSocket frames for pod chat.

Client frames form a closed tagged union keyed on ``type``: ``join_pod``,
``leave_pod`` and ``new_message``. Anything that does not validate against
that union (bad JSON, unknown type, missing fields, server-only types) is
treated as malformed and ignored by the connection handler.
"""
from typing import Annotated, Any, Dict, Literal, Optional, Union
from datetime import datetime, timezone
from uuid import UUID
from pydantic import Field, TypeAdapter, ValidationError

from .base import CamelModel
from .chat_schemas import ChatMessageOut


def _now() -> datetime:
    return datetime.now(timezone.utc)


# Client -> server

class JoinPodFrame(CamelModel):
    type: Literal["join_pod"]
    user_id: UUID
    pod_id: UUID


class LeavePodFrame(CamelModel):
    type: Literal["leave_pod"]


class NewMessageFrame(CamelModel):
    type: Literal["new_message"]
    content: str = Field(..., min_length=1, max_length=4000)
    message_type: Literal["text", "file"] = "text"
    metadata: Optional[Dict[str, Any]] = None


ClientFrame = Annotated[
    Union[JoinPodFrame, LeavePodFrame, NewMessageFrame],
    Field(discriminator="type"),
]

_client_frame_adapter = TypeAdapter(ClientFrame)


def parse_client_frame(raw: Union[str, bytes]) -> Optional[Union[JoinPodFrame, LeavePodFrame, NewMessageFrame]]:
    """Parse a raw frame, returning None for anything malformed."""
    try:
        return _client_frame_adapter.validate_json(raw)
    except ValidationError:
        return None


# Server -> client

class NewMessageEvent(CamelModel):
    type: Literal["new_message"] = "new_message"
    message: ChatMessageOut


class UserJoinedEvent(CamelModel):
    type: Literal["user_joined"] = "user_joined"
    user_id: UUID
    pod_id: UUID
    timestamp: datetime = Field(default_factory=_now)


class UserLeftEvent(CamelModel):
    type: Literal["user_left"] = "user_left"
    user_id: UUID
    pod_id: UUID
    timestamp: datetime = Field(default_factory=_now)


class ErrorEvent(CamelModel):
    type: Literal["error"] = "error"
    message: str
    detail: Optional[Any] = None


ServerEvent = Union[NewMessageEvent, UserJoinedEvent, UserLeftEvent, ErrorEvent]


def serialize_event(event: ServerEvent) -> str:
    return event.model_dump_json(by_alias=True)
