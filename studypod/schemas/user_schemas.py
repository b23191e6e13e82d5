# studypod/schemas/user_schemas.py
"""Pydantic schemas for users and learning profiles."""
from typing import Any, Dict, List, Optional
from datetime import datetime
from uuid import UUID
from pydantic import EmailStr, Field, field_validator

from .base import CamelModel

LEARNING_PACES = ("beginner", "intermediate", "advanced")


def _validate_pace(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip().lower()
    if value not in LEARNING_PACES:
        raise ValueError(f"learning pace must be one of {', '.join(LEARNING_PACES)}")
    return value


class UserCreate(CamelModel):
    email: EmailStr = Field(..., description="Email address")
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    auth_provider: str = Field(default="email", pattern="^(email|google)$")
    profile_image_url: Optional[str] = Field(default=None, max_length=500)


class ProfileUpdate(CamelModel):
    """Schema for updating a profile - all fields optional"""
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    profile_image_url: Optional[str] = Field(default=None, max_length=500)
    linkedin_id: Optional[str] = Field(default=None, max_length=200)
    github_id: Optional[str] = Field(default=None, max_length=100)
    study_goals: Optional[List[str]] = None
    preferred_subjects: Optional[List[str]] = None
    learning_pace: Optional[str] = None
    availability: Optional[Dict[str, Any]] = None

    @field_validator('learning_pace')
    @classmethod
    def validate_learning_pace(cls, v):
        return _validate_pace(v)


class UserSummary(CamelModel):
    id: UUID
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None


class UserOut(UserSummary):
    email: str
    auth_provider: str
    linkedin_id: Optional[str] = None
    github_id: Optional[str] = None
    role: Optional[str] = None
    study_goals: List[str] = Field(default_factory=list)
    preferred_subjects: List[str] = Field(default_factory=list)
    learning_pace: Optional[str] = None
    availability: Optional[Dict[str, Any]] = None
    study_streak: int = 0
    total_points: int = 0
    global_rank: Optional[int] = None
    total_study_time: int = 0
    completed_pods: int = 0
    created_at: Optional[datetime] = None

    @field_validator('study_goals', 'preferred_subjects', mode='before')
    @classmethod
    def none_as_empty(cls, v):
        return v or []
