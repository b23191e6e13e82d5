from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship
from .base import Base, utcnow

class VideoCallSession(Base):
    """A pod video call hosted on an external provider (Jitsi, Zoom, ...)."""
    __tablename__ = "video_call_sessions"

    pod_id = Column(Uuid(as_uuid=True), ForeignKey("study_pods.id"), nullable=False, index=True)
    host_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    meeting_url = Column(String(1000))
    is_active = Column(Boolean, default=False, nullable=False)
    scheduled_at = Column(DateTime(timezone=True))
    started_at = Column(DateTime(timezone=True))
    ended_at = Column(DateTime(timezone=True))
    participant_count = Column(Integer, default=0, nullable=False)
    max_participants = Column(Integer, default=8, nullable=False)
    recording_url = Column(String(1000))

    # Relationships
    pod = relationship("StudyPod")
    host = relationship("User")
    participants = relationship("VideoCallParticipant", back_populates="session", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_video_call_pod_active', 'pod_id', 'is_active'),
    )


class VideoCallParticipant(Base):
    __tablename__ = "video_call_participants"

    session_id = Column(Uuid(as_uuid=True), ForeignKey("video_call_sessions.id"), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    joined_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    left_at = Column(DateTime(timezone=True))
    duration = Column(Integer)  # minutes

    session = relationship("VideoCallSession", back_populates="participants")
    user = relationship("User")
