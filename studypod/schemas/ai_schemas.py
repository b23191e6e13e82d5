# studypod/schemas/ai_schemas.py
"""Request/response schemas for the AI study assistant."""
from typing import List, Optional
from datetime import datetime
from uuid import UUID
from pydantic import Field

from .base import CamelModel


class AskRequest(CamelModel):
    question: Optional[str] = None
    subject: Optional[str] = None
    context: Optional[str] = None


class AskResponse(CamelModel):
    response: str


class StudyTipResponse(CamelModel):
    tip: str
    subject: str


class StudyPlanRequest(CamelModel):
    subject: str = Field(..., min_length=1, max_length=100)
    time_available: int = Field(default=10, gt=0, le=168, description="Hours per week")


class StudyRecommendation(CamelModel):
    topic: str
    difficulty: str = "intermediate"
    estimated_time: int = Field(default=60, ge=0, description="Minutes")
    resources: List[str] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)


class StudyPlanResponse(CamelModel):
    study_plan: List[StudyRecommendation]


class ModerationResult(CamelModel):
    is_appropriate: bool = True
    reason: Optional[str] = None
    suggested_edit: Optional[str] = None


class AiInteractionOut(CamelModel):
    id: UUID
    user_id: UUID
    question: str
    response: str
    context: Optional[str] = None
    rating: Optional[int] = None
    created_at: Optional[datetime] = None
