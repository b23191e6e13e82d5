# studypod/schemas/pod_schemas.py
"""Pydantic schemas for study pods, memberships and recommendations."""
from typing import Any, Dict, List, Optional
from datetime import datetime
from decimal import Decimal
from uuid import UUID
from pydantic import Field, field_validator

from .base import CamelModel
from .user_schemas import UserSummary, _validate_pace


class StudyPodCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200, description="Pod name")
    description: Optional[str] = None
    subject: str = Field(..., min_length=1, max_length=100)
    goal: Optional[str] = None
    learning_pace: Optional[str] = None
    schedule: Optional[Dict[str, Any]] = None
    max_members: int = Field(default=8, ge=2, le=50)

    @field_validator('learning_pace')
    @classmethod
    def validate_learning_pace(cls, v):
        return _validate_pace(v)


class StudyPodOut(CamelModel):
    id: UUID
    name: str
    description: Optional[str] = None
    subject: str
    goal: Optional[str] = None
    learning_pace: Optional[str] = None
    schedule: Optional[Dict[str, Any]] = None
    max_members: int
    current_members: int
    creator_id: Optional[UUID] = None
    is_active: bool
    created_at: Optional[datetime] = None


class MembershipOut(CamelModel):
    id: UUID
    user_id: UUID
    pod_id: UUID
    role: str
    joined_at: datetime
    progress: Optional[Decimal] = None
    streak: Optional[int] = None
    rank: Optional[int] = None


class PodMemberOut(MembershipOut):
    user: UserSummary


class UserPodOut(MembershipOut):
    pod: StudyPodOut


class CompatibilityBreakdown(CamelModel):
    schedule_match: int = 0
    pace_match: int = 0
    subject_match: int = 0
    goal_alignment: int = 0


class PodMatchScore(CamelModel):
    score: int = Field(default=0, ge=0, le=100)
    reasons: List[str] = Field(default_factory=list)
    compatibility: CompatibilityBreakdown = Field(default_factory=CompatibilityBreakdown)


class PodRecommendation(StudyPodOut):
    match_score: int = Field(..., ge=0, le=100)
    match_reasons: List[str] = Field(default_factory=list)


class OnlineMembersOut(CamelModel):
    pod_id: UUID
    user_ids: List[str]
    connection_count: int
