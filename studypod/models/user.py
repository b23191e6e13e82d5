# studypod/models/user.py
"""User (student) profile model."""
from sqlalchemy import Column, String, Integer, JSON
from sqlalchemy.orm import relationship, validates
from .base import Base

class User(Base):
    __tablename__ = "users"

    email = Column(String(254), unique=True, index=True, nullable=False)
    auth_provider = Column(String(20), nullable=False, default="email")  # email, google
    first_name = Column(String(100))
    last_name = Column(String(100))
    profile_image_url = Column(String(500))
    linkedin_id = Column(String(200))
    github_id = Column(String(100))
    role = Column(String(20), default="student")  # student, admin

    # Learning profile used for pod matching
    study_goals = Column(JSON, default=list)
    preferred_subjects = Column(JSON, default=list)
    learning_pace = Column(String(20))  # beginner, intermediate, advanced
    availability = Column(JSON)  # {"monday": ["9:00", "17:00"], ...}

    # Gamification
    study_streak = Column(Integer, default=0, nullable=False)
    total_points = Column(Integer, default=0, nullable=False)
    global_rank = Column(Integer)
    total_study_time = Column(Integer, default=0, nullable=False)  # minutes
    completed_pods = Column(Integer, default=0, nullable=False)

    # Relationships
    memberships = relationship("PodMembership", back_populates="user")
    user_badges = relationship("UserBadge", back_populates="user")

    @validates('email')
    def validate_email(self, key, value):
        if not value or "@" not in value:
            raise ValueError("Invalid email address format")
        return value.strip().lower()

    @property
    def display_name(self) -> str:
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or self.email
