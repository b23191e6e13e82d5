from .chat_message import ChatMessage, MessageType

__all__ = ["ChatMessage", "MessageType"]
