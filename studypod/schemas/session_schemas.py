# studypod/schemas/session_schemas.py
from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import Field

from .base import CamelModel
from .pod_schemas import StudyPodOut


class StudySessionCreate(CamelModel):
    pod_id: UUID
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    topic: Optional[str] = Field(default=None, max_length=200)
    scheduled_at: datetime
    duration: int = Field(..., gt=0, le=24 * 60, description="Duration in minutes")


class StudySessionOut(CamelModel):
    id: UUID
    pod_id: UUID
    title: str
    description: Optional[str] = None
    topic: Optional[str] = None
    scheduled_at: datetime
    duration: int
    is_completed: bool
    attendee_count: int


class UpcomingSessionOut(StudySessionOut):
    pod: StudyPodOut


class AttendanceCreate(CamelModel):
    study_time_minutes: int = Field(default=0, ge=0)


class AttendanceOut(CamelModel):
    id: UUID
    session_id: UUID
    user_id: UUID
    attended_at: datetime
    study_time_minutes: int
