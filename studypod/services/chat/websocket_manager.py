# studypod/services/chat/websocket_manager.py
from typing import Any, Dict, List, Optional
from uuid import UUID
from fastapi import WebSocket
import logging

from ...core.config import settings
from ...schemas.chat_events import ServerEvent
from .broadcast_dispatcher import BroadcastDispatcher
from .connection_handler import ConnectionHandler, MessageSender, PodConnection
from .room_registry import RoomRegistry

logger = logging.getLogger(__name__)

class PodConnectionManager:
    """Owns the room registry and every live connection handler in this process."""

    def __init__(self, send_timeout: Optional[float] = None):
        self.registry = RoomRegistry()
        self.dispatcher = BroadcastDispatcher(
            self.registry,
            send_timeout=send_timeout,
            on_delivery_failure=self.disconnect,
        )
        # Store live handlers: {connection_id: handler}
        self.active_connections: Dict[str, ConnectionHandler] = {}

    async def connect(self, websocket: WebSocket, message_sender: Optional[MessageSender] = None) -> ConnectionHandler:
        """Accept websocket connection and start tracking it"""
        await websocket.accept()
        return self.register(websocket, message_sender)

    def register(self, transport: Any, message_sender: Optional[MessageSender] = None) -> ConnectionHandler:
        """Track an already-accepted transport"""
        connection = PodConnection(transport)
        handler = ConnectionHandler(
            connection,
            self.registry,
            self.dispatcher,
            message_sender=message_sender,
            on_closed=self._forget,
        )
        self.active_connections[connection.connection_id] = handler
        logger.info(f"Connection {connection.connection_id} opened. Active: {len(self.active_connections)}")
        return handler

    async def disconnect(self, connection: PodConnection, close_transport: bool = True) -> bool:
        """Close a connection by id; safe to call for connections that are already gone"""
        handler = self.active_connections.get(connection.connection_id)
        if handler is None:
            return False
        return await handler.close(close_transport=close_transport)

    def _forget(self, connection: PodConnection) -> None:
        self.active_connections.pop(connection.connection_id, None)

    async def broadcast_to_pod(self, pod_id: UUID, event: ServerEvent, exclude: Optional[PodConnection] = None) -> int:
        """Broadcast an event to everyone connected to a pod"""
        return await self.dispatcher.broadcast(pod_id, event, exclude=exclude)

    def get_online_users_in_pod(self, pod_id: UUID) -> List[str]:
        return self.registry.online_user_ids(pod_id)

    def get_pod_connection_count(self, pod_id: UUID) -> int:
        return len(self.registry.members_of(pod_id))

    def stats(self) -> Dict[str, int]:
        return {
            "activeConnections": len(self.active_connections),
            "rooms": self.registry.room_count,
            "joinedConnections": self.registry.connection_count,
        }

# Global instance
websocket_manager = PodConnectionManager(send_timeout=settings.ws_send_timeout_seconds)

def get_connection_manager() -> PodConnectionManager:
    return websocket_manager
