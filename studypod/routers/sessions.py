from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import get_current_user
from ..core.database import get_db
from ..models.user import User
from ..schemas.session_schemas import (
    AttendanceCreate,
    AttendanceOut,
    StudySessionCreate,
    StudySessionOut,
    UpcomingSessionOut,
)
from ..services.session_service import SessionService

router = APIRouter(prefix="/api", tags=["Study Sessions"])

@router.post("/sessions", response_model=StudySessionOut, status_code=status.HTTP_201_CREATED)
async def create_session(
    session_in: StudySessionCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = SessionService(db)
    return await service.create_session(session_in)

@router.get("/upcoming-sessions", response_model=List[UpcomingSessionOut])
async def get_upcoming_sessions(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Next sessions across the user's pods"""
    service = SessionService(db)
    return await service.get_upcoming_sessions(current_user.id)

@router.post("/sessions/{session_id}/attend", response_model=AttendanceOut, status_code=status.HTTP_201_CREATED)
async def attend_session(
    session_id: UUID,
    attendance_in: AttendanceCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = SessionService(db)
    return await service.mark_attendance(session_id, current_user, attendance_in.study_time_minutes)
