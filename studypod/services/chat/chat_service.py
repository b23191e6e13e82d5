# studypod/services/chat/chat_service.py
from typing import Any, Dict, List, Optional, TYPE_CHECKING
from uuid import UUID
import logging

from sqlalchemy import select, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from ..base_service import BaseService
from ...core.config import settings
from ...core.exceptions import MessagePersistenceError, MessageRejected, PodNotFound, UserNotFound
from ...models.chat.chat_message import ChatMessage, MessageType
from ...models.study_pod import StudyPod
from ...models.user import User
from ...schemas.chat_events import NewMessageEvent
from ...schemas.chat_schemas import ChatMessageOut

if TYPE_CHECKING:
    from ..ai.study_ai_service import StudyAIService
    from .websocket_manager import PodConnectionManager

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100

class ChatService(BaseService[ChatMessage]):
    """Pod chat: history reads and the moderate -> persist -> broadcast send path."""

    def __init__(
        self,
        db: AsyncSession,
        connection_manager: Optional["PodConnectionManager"] = None,
        ai_service: Optional["StudyAIService"] = None,
    ):
        super().__init__(ChatMessage, db)
        self.connection_manager = connection_manager
        self.ai_service = ai_service

    async def create_message(
        self,
        pod_id: UUID,
        user_id: UUID,
        content: str,
        message_type: str = MessageType.TEXT.value,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> ChatMessage:
        """Insert a message and return the stored row"""
        message = ChatMessage(
            pod_id=pod_id,
            user_id=user_id,
            content=content,
            message_type=message_type,
            message_metadata=metadata,
        )
        self.db.add(message)
        try:
            await self.db.commit()
            await self.db.refresh(message)
        except SQLAlchemyError as e:
            logger.error(f"Failed to persist message in pod {pod_id}: {e}")
            await self.db.rollback()
            raise MessagePersistenceError()
        return message

    async def get_pod_messages(self, pod_id: UUID, limit: Optional[int] = None) -> List[ChatMessage]:
        """Most recent messages first, with their authors loaded"""
        limit = max(1, min(limit or settings.default_message_page_size, MAX_PAGE_SIZE))
        stmt = (
            select(ChatMessage)
            .options(joinedload(ChatMessage.user))
            .where(
                ChatMessage.pod_id == pod_id,
                ChatMessage.is_deleted == False,
            )
            .order_by(desc(ChatMessage.created_at), desc(ChatMessage.id))
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def post_message(
        self,
        pod_id: UUID,
        user_id: UUID,
        content: str,
        message_type: str = MessageType.TEXT.value,
        metadata: Optional[Dict[str, Any]] = None,
        user: Optional[User] = None,
    ) -> ChatMessageOut:
        """Moderate, persist, then broadcast. Nothing is broadcast unless the commit succeeded."""
        pod = await self.db.get(StudyPod, pod_id)
        if pod is None or pod.is_deleted:
            raise PodNotFound()
        if user is None:
            user = await self.db.get(User, user_id)
            if user is None:
                raise UserNotFound()

        if self.ai_service is not None:
            moderation = await self.ai_service.moderate_chat_message(content)
            if not moderation.is_appropriate:
                logger.info(f"Message from {user_id} rejected in pod {pod_id}: {moderation.reason}")
                raise MessageRejected(moderation.reason, moderation.suggested_edit)

        message = await self.create_message(pod_id, user_id, content, message_type, metadata)
        payload = ChatMessageOut.from_model(message, user=user)

        if self.connection_manager is not None:
            await self.connection_manager.broadcast_to_pod(pod_id, NewMessageEvent(message=payload))
        return payload
