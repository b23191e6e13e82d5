# studypod/models/study_pod.py
from sqlalchemy import Column, String, Text, Integer, Boolean, Numeric, JSON, ForeignKey, Index, DateTime, Uuid
from sqlalchemy.orm import relationship
from .base import Base, utcnow

class StudyPod(Base):
    __tablename__ = "study_pods"

    name = Column(String(200), nullable=False)
    description = Column(Text)
    subject = Column(String(100), nullable=False, index=True)
    goal = Column(Text)
    learning_pace = Column(String(20), index=True)  # beginner, intermediate, advanced
    schedule = Column(JSON)  # {"days": ["monday", "wednesday"], "time": "19:00", "duration": 120}
    max_members = Column(Integer, default=8, nullable=False)
    current_members = Column(Integer, default=0, nullable=False)
    creator_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), index=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    creator = relationship("User")
    memberships = relationship("PodMembership", back_populates="pod", cascade="all, delete-orphan")

    @property
    def is_full(self) -> bool:
        return (self.current_members or 0) >= (self.max_members or 0)


class PodMembership(Base):
    __tablename__ = "pod_memberships"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    pod_id = Column(Uuid(as_uuid=True), ForeignKey("study_pods.id"), nullable=False, index=True)
    role = Column(String(20), default="member", nullable=False)  # member, moderator, creator
    joined_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    progress = Column(Numeric(5, 2), default=0)
    streak = Column(Integer, default=0)
    rank = Column(Integer)

    # Relationships
    user = relationship("User", back_populates="memberships")
    pod = relationship("StudyPod", back_populates="memberships")

    __table_args__ = (
        Index('idx_pod_membership_unique', 'pod_id', 'user_id', unique=True),
    )
