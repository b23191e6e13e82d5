from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import Field

from .base import CamelModel
from .user_schemas import UserSummary


class VideoCallCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    meeting_url: Optional[str] = Field(default=None, max_length=1000)
    scheduled_at: Optional[datetime] = None
    max_participants: int = Field(default=8, ge=2, le=50)
    recording_url: Optional[str] = Field(default=None, max_length=1000)


class VideoCallStatusUpdate(CamelModel):
    is_active: bool


class VideoCallOut(CamelModel):
    id: UUID
    pod_id: UUID
    host_id: UUID
    title: str
    description: Optional[str] = None
    meeting_url: Optional[str] = None
    is_active: bool
    scheduled_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None
    participant_count: int
    max_participants: int
    recording_url: Optional[str] = None
    created_at: Optional[datetime] = None


class VideoCallParticipantOut(CamelModel):
    id: UUID
    session_id: UUID
    user_id: UUID
    joined_at: datetime
    left_at: Optional[datetime] = None
    duration: Optional[int] = None


class VideoCallParticipantWithUserOut(VideoCallParticipantOut):
    user: UserSummary
