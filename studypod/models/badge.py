# studypod/models/badge.py
from sqlalchemy import Column, String, Text, JSON, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import Base, utcnow

class Badge(Base):
    __tablename__ = "badges"

    name = Column(String(100), nullable=False)
    description = Column(Text)
    icon = Column(String(100), nullable=False)
    category = Column(String(30))  # streak, contribution, achievement, learning
    requirements = Column(JSON)


class UserBadge(Base):
    __tablename__ = "user_badges"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    badge_id = Column(Uuid(as_uuid=True), ForeignKey("badges.id"), nullable=False, index=True)
    earned_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    progress = Column(JSON)

    user = relationship("User", back_populates="user_badges")
    badge = relationship("Badge")
