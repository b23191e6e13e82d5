from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import get_current_user
from ..core.database import get_db
from ..models.user import User
from ..schemas.pod_schemas import (
    MembershipOut,
    OnlineMembersOut,
    PodMemberOut,
    PodRecommendation,
    StudyPodCreate,
    StudyPodOut,
    UserPodOut,
)
from ..services.ai.recommendation_service import RecommendationService
from ..services.ai.study_ai_service import StudyAIService, get_ai_service
from ..services.chat.websocket_manager import PodConnectionManager, get_connection_manager
from ..services.pod_service import PodService

router = APIRouter(prefix="/api", tags=["Study Pods"])

@router.post("/pods", response_model=StudyPodOut, status_code=status.HTTP_201_CREATED)
async def create_pod(
    pod_in: StudyPodCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create a pod; the creator joins it with role "creator" """
    service = PodService(db)
    return await service.create_pod(pod_in, current_user)

@router.get("/pods", response_model=List[StudyPodOut])
async def list_pods(
    subject: Optional[str] = Query(None),
    learning_pace: Optional[str] = Query(None, alias="learningPace"),
    db: AsyncSession = Depends(get_db)
):
    service = PodService(db)
    return await service.list_pods(subject=subject, learning_pace=learning_pace)

@router.get("/pods/{pod_id}", response_model=StudyPodOut)
async def get_pod(pod_id: UUID, db: AsyncSession = Depends(get_db)):
    service = PodService(db)
    return await service.get_or_404(pod_id)

@router.post("/pods/{pod_id}/join", response_model=MembershipOut, status_code=status.HTTP_201_CREATED)
async def join_pod(
    pod_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = PodService(db)
    return await service.join_pod(pod_id, current_user)

@router.get("/pods/{pod_id}/members", response_model=List[PodMemberOut])
async def get_pod_members(pod_id: UUID, db: AsyncSession = Depends(get_db)):
    service = PodService(db)
    return await service.get_pod_members(pod_id)

@router.get("/pods/{pod_id}/online", response_model=OnlineMembersOut)
async def get_online_members(
    pod_id: UUID,
    manager: PodConnectionManager = Depends(get_connection_manager)
):
    """Users with a live WebSocket in the pod's room right now"""
    return OnlineMembersOut(
        pod_id=pod_id,
        user_ids=manager.get_online_users_in_pod(pod_id),
        connection_count=manager.get_pod_connection_count(pod_id),
    )

@router.get("/my-pods", response_model=List[UserPodOut])
async def get_my_pods(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = PodService(db)
    return await service.get_user_pods(current_user.id)

@router.get("/recommendations", response_model=List[PodRecommendation])
async def get_recommendations(
    limit: int = Query(5, ge=1, le=20),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    ai_service: StudyAIService = Depends(get_ai_service)
):
    """Joinable pods scored against the user's learning profile, best match first"""
    service = RecommendationService(db, ai_service)
    return await service.get_recommendations(current_user, limit=limit)
