# studypod/services/file_service.py
from typing import List
from uuid import UUID
import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from .base_service import BaseService
from ..core.exceptions import PodNotFound
from ..models.pod_file import PodFile
from ..models.study_pod import StudyPod
from ..schemas.file_schemas import PodFileCreate

logger = logging.getLogger(__name__)

class FileService(BaseService[PodFile]):
    def __init__(self, db: AsyncSession):
        super().__init__(PodFile, db)

    async def upload_file(self, pod_id: UUID, user_id: UUID, file_in: PodFileCreate) -> PodFile:
        """Record metadata for a file already stored elsewhere"""
        pod = await self.db.get(StudyPod, pod_id)
        if pod is None or pod.is_deleted:
            raise PodNotFound()
        return await self.create({**file_in.model_dump(), "pod_id": pod_id, "uploaded_by": user_id})

    async def get_pod_files(self, pod_id: UUID) -> List[PodFile]:
        stmt = (
            select(PodFile)
            .options(joinedload(PodFile.uploader))
            .where(PodFile.pod_id == pod_id, PodFile.is_deleted == False)
            .order_by(PodFile.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def delete_file(self, file_id: UUID, user_id: UUID) -> bool:
        """Only the uploader may delete a file"""
        file = await self.get(file_id)
        if file is None or file.uploaded_by != user_id:
            return False
        await self.soft_delete(file.id)
        logger.info(f"User {user_id} deleted file {file_id}")
        return True

    async def increment_download_count(self, file_id: UUID) -> bool:
        stmt = (
            update(PodFile)
            .where(PodFile.id == file_id, PodFile.is_deleted == False)
            .values(download_count=PodFile.download_count + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        await self.db.commit()
        return result.rowcount > 0
