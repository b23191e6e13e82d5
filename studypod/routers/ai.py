import random
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from ..core.auth import get_current_user
from ..core.database import get_db
from ..models.user import User
from ..schemas.ai_schemas import (
    AiInteractionOut,
    AskRequest,
    AskResponse,
    StudyPlanRequest,
    StudyPlanResponse,
    StudyTipResponse,
)
from ..services.ai.study_ai_service import StudyAIService, get_ai_service
from ..services.ai_interaction_service import AiInteractionService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/ai", tags=["AI Assistant"])

DEFAULT_SUBJECT = "General"
DEFAULT_PACE = "intermediate"

@router.post("/ask", response_model=AskResponse)
async def ask_question(
    request: AskRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    ai_service: StudyAIService = Depends(get_ai_service)
):
    """Answer a study question and keep it in the user's AI history"""
    if not request.question or not request.question.strip():
        raise HTTPException(status_code=400, detail="Question is required")

    response = await ai_service.answer_study_question(request.question, request.subject, request.context)

    service = AiInteractionService(db)
    await service.record(current_user.id, request.question, response, request.subject or request.context)
    return AskResponse(response=response)

@router.get("/study-tip", response_model=StudyTipResponse)
async def get_study_tip(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    ai_service: StudyAIService = Depends(get_ai_service)
):
    subject = random.choice(current_user.preferred_subjects or [DEFAULT_SUBJECT])
    recent_topics = await AiInteractionService(db).get_recent_contexts(current_user.id)

    tip = await ai_service.generate_study_tip(subject, current_user.learning_pace or DEFAULT_PACE, recent_topics)
    return StudyTipResponse(tip=tip, subject=subject)

@router.post("/study-plan", response_model=StudyPlanResponse)
async def create_study_plan(
    request: StudyPlanRequest,
    current_user: User = Depends(get_current_user),
    ai_service: StudyAIService = Depends(get_ai_service)
):
    study_plan = await ai_service.generate_study_plan(
        request.subject,
        current_user.learning_pace or DEFAULT_PACE,
        current_user.study_goals or [],
        request.time_available,
    )
    return StudyPlanResponse(study_plan=study_plan)

@router.get("/history", response_model=List[AiInteractionOut])
async def get_ai_history(
    limit: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = AiInteractionService(db)
    return await service.get_user_history(current_user.id, limit=limit)
