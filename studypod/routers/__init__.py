from . import health, users, pods, sessions, badges, files, ai, video_calls
from .chat import chat_router, websocket_router

__all__ = [
    "health",
    "users",
    "pods",
    "sessions",
    "badges",
    "files",
    "ai",
    "video_calls",
    "chat_router",
    "websocket_router",
]
