# studypod/models/chat/chat_message.py
import enum
from sqlalchemy import Column, String, Text, JSON, BigInteger, Integer, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship
from ..base import Base


class MessageType(str, enum.Enum):
    TEXT = "text"
    FILE = "file"
    AI_RESPONSE = "ai_response"


class ChatMessage(Base):
    """Append-only pod chat message; ordered by (created_at, id)."""
    __tablename__ = "chat_messages"

    # Integer identity; breaks created_at ties in insertion order
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)

    pod_id = Column(Uuid(as_uuid=True), ForeignKey("study_pods.id"), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    message_type = Column(String(20), default=MessageType.TEXT.value, nullable=False)
    # "metadata" is reserved on declarative classes
    message_metadata = Column("metadata", JSON)

    # Relationships
    user = relationship("User")

    __table_args__ = (
        Index('idx_chat_message_pod_time', 'pod_id', 'created_at', 'id'),
    )
