# studypod/models/ai_interaction.py
from sqlalchemy import Column, String, Text, Integer, ForeignKey, Index, Uuid
from .base import Base

class AiInteraction(Base):
    __tablename__ = "ai_interactions"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    question = Column(Text, nullable=False)
    response = Column(Text, nullable=False)
    context = Column(String(200))  # subject, topic or pod id
    rating = Column(Integer)  # user feedback 1-5

    __table_args__ = (
        Index('idx_ai_interaction_user_time', 'user_id', 'created_at'),
    )
