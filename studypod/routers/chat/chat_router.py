# studypod/routers/chat/chat_router.py
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.auth import get_current_user
from ...core.database import get_db
from ...models.user import User
from ...schemas.chat_schemas import ChatMessageOut, SendMessageRequest
from ...services.ai.study_ai_service import StudyAIService, get_ai_service
from ...services.chat.chat_service import ChatService, MAX_PAGE_SIZE
from ...services.chat.websocket_manager import PodConnectionManager, get_connection_manager
from ...services.pod_service import PodService

router = APIRouter(prefix="/api/pods", tags=["Pod Chat"])

@router.get("/{pod_id}/messages", response_model=List[ChatMessageOut])
async def get_pod_messages(
    pod_id: UUID,
    limit: Optional[int] = Query(None, ge=1, le=MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db)
):
    """Most recent messages first"""
    await PodService(db).get_or_404(pod_id)

    service = ChatService(db)
    messages = await service.get_pod_messages(pod_id, limit)
    return [ChatMessageOut.from_model(message, user=message.user) for message in messages]

@router.post("/{pod_id}/messages", response_model=ChatMessageOut, status_code=status.HTTP_201_CREATED)
async def send_pod_message(
    pod_id: UUID,
    request: SendMessageRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    manager: PodConnectionManager = Depends(get_connection_manager),
    ai_service: StudyAIService = Depends(get_ai_service)
):
    """Moderate, store and broadcast a message to everyone connected to the pod"""
    service = ChatService(db, connection_manager=manager, ai_service=ai_service)
    return await service.post_message(
        pod_id,
        current_user.id,
        request.content,
        message_type=request.message_type,
        metadata=request.metadata,
        user=current_user,
    )
