# studypod/routers/chat/websocket_router.py
import asyncio
from uuid import UUID
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, Depends
from sqlalchemy.ext.asyncio import async_sessionmaker
import logging

from ...core.config import settings
from ...core.database import get_session_factory
from ...schemas.chat_events import NewMessageFrame
from ...services.ai.study_ai_service import StudyAIService, get_ai_service
from ...services.chat.chat_service import ChatService
from ...services.chat.connection_handler import ConnectionState
from ...services.chat.websocket_manager import PodConnectionManager, get_connection_manager

logger = logging.getLogger(__name__)
router = APIRouter()

@router.websocket("/ws")
async def pod_chat_websocket(
    websocket: WebSocket,
    manager: PodConnectionManager = Depends(get_connection_manager),
    session_factory: async_sessionmaker = Depends(get_session_factory),
    ai_service: StudyAIService = Depends(get_ai_service)
):
    """WebSocket endpoint for pod presence and chat"""

    async def send_message(pod_id: UUID, user_id: UUID, frame: NewMessageFrame) -> None:
        # One short-lived session per message; the socket may stay open for hours
        async with session_factory() as db:
            service = ChatService(db, connection_manager=manager, ai_service=ai_service)
            await service.post_message(
                pod_id,
                user_id,
                frame.content,
                message_type=frame.message_type,
                metadata=frame.metadata,
            )

    handler = await manager.connect(websocket, message_sender=send_message)
    connection_id = handler.connection.connection_id
    idle_timeout = settings.ws_idle_timeout_seconds or None

    try:
        while handler.state is not ConnectionState.CLOSED:
            try:
                message = await asyncio.wait_for(websocket.receive(), timeout=idle_timeout)
            except asyncio.TimeoutError:
                logger.info(f"Closing idle connection {connection_id}")
                await handler.close(close_transport=True)
                break

            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))

            # Text or binary; anything that is not a valid frame is ignored by the handler
            data = message.get("text")
            if data is None:
                data = message.get("bytes")
            if data is None:
                continue
            await handler.handle_text(data)

    except WebSocketDisconnect:
        logger.info(f"Connection {connection_id} disconnected")
    except Exception as e:
        logger.error(f"WebSocket error on connection {connection_id}: {e}")
        await handler.close(close_transport=True)
    finally:
        await handler.close()
