# studypod/models/pod_file.py
from sqlalchemy import Column, String, Text, Integer, Boolean, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import Base

class PodFile(Base):
    __tablename__ = "pod_files"

    pod_id = Column(Uuid(as_uuid=True), ForeignKey("study_pods.id"), nullable=False, index=True)
    uploaded_by = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    file_name = Column(String(255), nullable=False)
    file_type = Column(String(50), nullable=False)  # pdf, doc, txt, image, ...
    file_size = Column(Integer)  # bytes
    file_url = Column(String(1000), nullable=False)  # object storage URL
    description = Column(Text)
    is_public = Column(Boolean, default=True, nullable=False)
    download_count = Column(Integer, default=0, nullable=False)

    uploader = relationship("User")
