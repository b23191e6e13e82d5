# studypod/schemas/file_schemas.py
from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import Field

from .base import CamelModel
from .user_schemas import UserSummary


class PodFileCreate(CamelModel):
    file_name: str = Field(..., min_length=1, max_length=255)
    file_type: str = Field(..., min_length=1, max_length=50)
    file_size: Optional[int] = Field(default=None, ge=0)
    file_url: str = Field(..., min_length=1, max_length=1000)
    description: Optional[str] = None
    is_public: bool = True


class PodFileOut(CamelModel):
    id: UUID
    pod_id: UUID
    uploaded_by: UUID
    file_name: str
    file_type: str
    file_size: Optional[int] = None
    file_url: str
    description: Optional[str] = None
    is_public: bool
    download_count: int
    created_at: Optional[datetime] = None


class PodFileWithUploaderOut(PodFileOut):
    uploader: UserSummary
