# studypod/models/study_session.py
from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship
from .base import Base, utcnow

class StudySession(Base):
    __tablename__ = "study_sessions"

    pod_id = Column(Uuid(as_uuid=True), ForeignKey("study_pods.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    topic = Column(String(200))
    scheduled_at = Column(DateTime(timezone=True), nullable=False)
    duration = Column(Integer, nullable=False)  # minutes
    is_completed = Column(Boolean, default=False, nullable=False)
    attendee_count = Column(Integer, default=0, nullable=False)

    # Relationships
    pod = relationship("StudyPod")
    attendance = relationship("SessionAttendance", back_populates="session", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_study_session_pod_time', 'pod_id', 'scheduled_at'),
    )


class SessionAttendance(Base):
    __tablename__ = "session_attendance"

    session_id = Column(Uuid(as_uuid=True), ForeignKey("study_sessions.id"), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    attended_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    study_time_minutes = Column(Integer, default=0, nullable=False)

    session = relationship("StudySession", back_populates="attendance")
