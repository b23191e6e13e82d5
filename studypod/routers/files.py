from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import get_current_user
from ..core.database import get_db
from ..models.user import User
from ..schemas.file_schemas import PodFileCreate, PodFileOut, PodFileWithUploaderOut
from ..services.file_service import FileService

router = APIRouter(prefix="/api", tags=["Pod Files"])

@router.post("/pods/{pod_id}/files", response_model=PodFileOut, status_code=status.HTTP_201_CREATED)
async def upload_file(
    pod_id: UUID,
    file_in: PodFileCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Record metadata for a file shared in a pod"""
    service = FileService(db)
    return await service.upload_file(pod_id, current_user.id, file_in)

@router.get("/pods/{pod_id}/files", response_model=List[PodFileWithUploaderOut])
async def get_pod_files(pod_id: UUID, db: AsyncSession = Depends(get_db)):
    service = FileService(db)
    return await service.get_pod_files(pod_id)

@router.delete("/files/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_file(
    file_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = FileService(db)
    if not await service.delete_file(file_id, current_user.id):
        raise HTTPException(status_code=404, detail="File not found or unauthorized")

@router.post("/files/{file_id}/download")
async def track_download(file_id: UUID, db: AsyncSession = Depends(get_db)):
    service = FileService(db)
    if not await service.increment_download_count(file_id):
        raise HTTPException(status_code=404, detail="File not found")
    return {"success": True}
