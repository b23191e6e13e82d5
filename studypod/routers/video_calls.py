from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import get_current_user
from ..core.database import get_db
from ..models.user import User
from ..schemas.video_call_schemas import (
    VideoCallCreate,
    VideoCallOut,
    VideoCallParticipantOut,
    VideoCallParticipantWithUserOut,
    VideoCallStatusUpdate,
)
from ..services.video_call_service import VideoCallService

router = APIRouter(prefix="/api", tags=["Video Calls"])

@router.post("/pods/{pod_id}/video-calls", response_model=VideoCallOut, status_code=status.HTTP_201_CREATED)
async def create_video_call(
    pod_id: UUID,
    call_in: VideoCallCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = VideoCallService(db)
    return await service.create_call(pod_id, current_user.id, call_in)

@router.get("/pods/{pod_id}/video-calls", response_model=List[VideoCallOut])
async def get_pod_video_calls(pod_id: UUID, db: AsyncSession = Depends(get_db)):
    service = VideoCallService(db)
    return await service.get_pod_calls(pod_id)

@router.get("/pods/{pod_id}/active-call", response_model=Optional[VideoCallOut])
async def get_active_call(pod_id: UUID, db: AsyncSession = Depends(get_db)):
    """The pod's running call, or null"""
    service = VideoCallService(db)
    return await service.get_active_call(pod_id)

@router.post("/video-calls/{call_id}/join", response_model=VideoCallParticipantOut, status_code=status.HTTP_201_CREATED)
async def join_video_call(
    call_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = VideoCallService(db)
    return await service.join_call(call_id, current_user.id)

@router.post("/video-calls/{call_id}/leave")
async def leave_video_call(
    call_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = VideoCallService(db)
    await service.leave_call(call_id, current_user.id)
    return {"message": "Left video call successfully"}

@router.put("/video-calls/{call_id}/status", response_model=VideoCallOut)
async def update_video_call_status(
    call_id: UUID,
    status_in: VideoCallStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = VideoCallService(db)
    return await service.update_status(call_id, current_user.id, status_in.is_active)

@router.get("/video-calls/{call_id}/participants", response_model=List[VideoCallParticipantWithUserOut])
async def get_video_call_participants(call_id: UUID, db: AsyncSession = Depends(get_db)):
    service = VideoCallService(db)
    return await service.get_participants(call_id)
