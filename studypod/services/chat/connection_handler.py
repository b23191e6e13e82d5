# studypod/services/chat/connection_handler.py
"""Per-connection state machine for the pod chat WebSocket.

    CONNECTED --join_pod--> JOINED --leave_pod--> CONNECTED
        |                     |
        +------- close -------+--> CLOSED

``close()`` may be reached from several paths at once (receive loop exit,
a failed broadcast write, idle timeout). Only the first call does anything.
"""
import enum
import uuid
from typing import Any, Awaitable, Callable, Optional, Tuple
from uuid import UUID
import logging

from ...core.exceptions import StudyPodException
from ...schemas.chat_events import (
    ErrorEvent,
    JoinPodFrame,
    LeavePodFrame,
    NewMessageFrame,
    UserJoinedEvent,
    UserLeftEvent,
    parse_client_frame,
)
from .broadcast_dispatcher import BroadcastDispatcher
from .room_registry import RoomRegistry

logger = logging.getLogger(__name__)

MessageSender = Callable[[UUID, UUID, NewMessageFrame], Awaitable[Any]]


class ConnectionState(str, enum.Enum):
    CONNECTED = "connected"
    JOINED = "joined"
    CLOSED = "closed"


class PodConnection:
    """One live transport plus the user/pod it is bound to."""

    def __init__(self, transport: Any, connection_id: Optional[str] = None):
        self.transport = transport
        self.connection_id = connection_id or uuid.uuid4().hex
        self.state = ConnectionState.CONNECTED
        self.user_id: Optional[UUID] = None
        self.pod_id: Optional[UUID] = None

    @property
    def is_open(self) -> bool:
        return self.state is not ConnectionState.CLOSED

    def mark_closed(self) -> None:
        """Final state for a connection dropped without a handler (no room, no identity)."""
        self.state = ConnectionState.CLOSED
        self.pod_id = None
        self.user_id = None

    async def send_text(self, data: str) -> None:
        await self.transport.send_text(data)

    def __repr__(self) -> str:
        return (
            f"PodConnection(id={self.connection_id!r}, state={self.state.value}, "
            f"user_id={self.user_id}, pod_id={self.pod_id})"
        )


class ConnectionHandler:
    def __init__(
        self,
        connection: PodConnection,
        registry: RoomRegistry,
        dispatcher: BroadcastDispatcher,
        message_sender: Optional[MessageSender] = None,
        on_closed: Optional[Callable[[PodConnection], None]] = None,
    ):
        self.connection = connection
        self.registry = registry
        self.dispatcher = dispatcher
        self.message_sender = message_sender
        self.on_closed = on_closed

    @property
    def state(self) -> ConnectionState:
        return self.connection.state

    async def handle_text(self, raw: Any) -> None:
        """Dispatch one inbound frame."""
        if self.connection.state is ConnectionState.CLOSED:
            return

        frame = parse_client_frame(raw)
        if frame is None:
            logger.debug(f"Ignoring malformed frame on {self.connection.connection_id}")
            return

        if isinstance(frame, JoinPodFrame):
            await self._join(frame)
        elif isinstance(frame, LeavePodFrame):
            await self._leave()
        elif isinstance(frame, NewMessageFrame):
            await self._forward_message(frame)

    async def close(self, close_transport: bool = False) -> bool:
        """Tear the connection down. Returns False if it was already closed."""
        connection = self.connection
        if connection.state is ConnectionState.CLOSED:
            return False

        # Registry removal and the state flip happen before the first await
        previous = self._detach()
        connection.state = ConnectionState.CLOSED
        if self.on_closed is not None:
            self.on_closed(connection)
        logger.info(f"Connection {connection.connection_id} closed")

        if previous is not None:
            await self._announce_departure(*previous)

        if close_transport:
            try:
                await connection.transport.close()
            except Exception as e:
                # Transport already gone
                logger.debug(f"Error closing transport {connection.connection_id}: {e!r}")
        return True

    async def _join(self, frame: JoinPodFrame) -> None:
        connection = self.connection
        if (
            connection.state is ConnectionState.JOINED
            and connection.pod_id == frame.pod_id
            and connection.user_id == frame.user_id
        ):
            logger.debug(f"Connection {connection.connection_id} already in pod {frame.pod_id}")
            return

        previous = self._detach()
        connection.user_id = frame.user_id
        connection.pod_id = frame.pod_id
        connection.state = ConnectionState.JOINED
        self.registry.join(frame.pod_id, connection)

        if previous is not None:
            await self._announce_departure(*previous)

        await self.dispatcher.broadcast(
            frame.pod_id,
            UserJoinedEvent(user_id=frame.user_id, pod_id=frame.pod_id),
            exclude=connection,
        )

    async def _leave(self) -> None:
        previous = self._detach()
        if previous is None:
            logger.debug(f"leave_pod ignored on {self.connection.connection_id}: not in a pod")
            return

        self.connection.state = ConnectionState.CONNECTED
        await self._announce_departure(*previous)

    async def _forward_message(self, frame: NewMessageFrame) -> None:
        connection = self.connection
        if connection.state is not ConnectionState.JOINED:
            logger.debug(f"new_message ignored on {connection.connection_id}: not in a pod")
            return
        if self.message_sender is None:
            logger.warning(f"No message sender configured; dropping message on {connection.connection_id}")
            return

        try:
            await self.message_sender(connection.pod_id, connection.user_id, frame)
        except StudyPodException as e:
            await self.dispatcher.send_to(connection, _error_event(e.detail))
        except Exception as e:
            logger.error(f"Error sending message from {connection.connection_id}: {e}")
            await self.dispatcher.send_to(connection, ErrorEvent(message="Failed to send message"))

    def _detach(self) -> Optional[Tuple[UUID, UUID]]:
        """Leave the current room, returning (pod_id, user_id) if there was one."""
        connection = self.connection
        if connection.state is not ConnectionState.JOINED:
            return None

        previous = (connection.pod_id, connection.user_id)
        self.registry.leave(connection.pod_id, connection)
        connection.pod_id = None
        connection.user_id = None
        return previous

    async def _announce_departure(self, pod_id: UUID, user_id: UUID) -> None:
        await self.dispatcher.broadcast(pod_id, UserLeftEvent(user_id=user_id, pod_id=pod_id))


def _error_event(detail: Any) -> ErrorEvent:
    if isinstance(detail, dict):
        return ErrorEvent(message=str(detail.get("message", "Request failed")), detail=detail)
    return ErrorEvent(message=str(detail))
