from .room_registry import RoomRegistry
from .broadcast_dispatcher import BroadcastDispatcher
from .connection_handler import ConnectionHandler, ConnectionState, PodConnection
from .websocket_manager import PodConnectionManager, websocket_manager, get_connection_manager
from .chat_service import ChatService

__all__ = [
    "RoomRegistry",
    "BroadcastDispatcher",
    "ConnectionHandler",
    "ConnectionState",
    "PodConnection",
    "PodConnectionManager",
    "websocket_manager",
    "get_connection_manager",
    "ChatService",
]
