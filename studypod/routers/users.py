from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import get_current_user
from ..core.database import get_db
from ..models.user import User
from ..schemas.user_schemas import ProfileUpdate, UserCreate, UserOut
from ..services.user_service import UserService

router = APIRouter(prefix="/api", tags=["Users"])

@router.post("/users", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_in: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """Provision a student profile"""
    service = UserService(db)
    return await service.create_user(user_in)

@router.get("/profile", response_model=UserOut)
async def get_profile(current_user: User = Depends(get_current_user)):
    return current_user

@router.put("/profile", response_model=UserOut)
async def update_profile(
    profile: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update learning profile and social ids; omitted fields are left unchanged"""
    service = UserService(db)
    return await service.update_profile(current_user.id, profile)
