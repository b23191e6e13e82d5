# studypod/services/chat/broadcast_dispatcher.py
import asyncio
from typing import Any, Awaitable, Callable, List, Optional, TYPE_CHECKING
import logging

from ...schemas.chat_events import ServerEvent, serialize_event
from .room_registry import RoomRegistry

if TYPE_CHECKING:
    from .connection_handler import PodConnection

logger = logging.getLogger(__name__)

DeliveryFailureCallback = Callable[["PodConnection"], Awaitable[Any]]

class BroadcastDispatcher:
    """Fan-out of server events to the connections in a pod's room.

    Delivery is best-effort and at-most-once per call. A connection whose
    write fails (or exceeds ``send_timeout``) is handed to
    ``on_delivery_failure`` after the loop, so it never blocks the others.
    """

    def __init__(
        self,
        registry: RoomRegistry,
        send_timeout: Optional[float] = None,
        on_delivery_failure: Optional[DeliveryFailureCallback] = None,
    ):
        self.registry = registry
        self.send_timeout = send_timeout
        self.on_delivery_failure = on_delivery_failure

    async def broadcast(
        self,
        pod_id: Any,
        event: ServerEvent,
        exclude: Optional["PodConnection"] = None,
    ) -> int:
        """Send event to every member of the pod's room; returns the delivered count"""
        members = self.registry.members_of(pod_id)
        if not members:
            logger.debug(f"Pod {pod_id} has no live connections for {event.type}")
            return 0

        payload = serialize_event(event)
        failed: List["PodConnection"] = []
        sent_count = 0

        for connection in members:
            if connection is exclude:
                continue
            # Closed while an earlier send in this loop was suspended
            if not connection.is_open:
                continue
            try:
                await self._send(connection, payload)
                sent_count += 1
            except Exception as e:
                logger.error(f"Error broadcasting {event.type} to {connection.connection_id}: {e!r}")
                failed.append(connection)

        logger.info(f"Broadcast {event.type} to pod {pod_id}: sent to {sent_count} connections")

        for connection in failed:
            await self._handle_failure(connection)

        return sent_count

    async def send_to(self, connection: "PodConnection", event: ServerEvent) -> bool:
        """Send an event to a single connection"""
        if not connection.is_open:
            return False
        try:
            await self._send(connection, serialize_event(event))
            return True
        except Exception as e:
            logger.error(f"Error sending {event.type} to {connection.connection_id}: {e!r}")
            await self._handle_failure(connection)
            return False

    async def _send(self, connection: "PodConnection", payload: str) -> None:
        if self.send_timeout:
            await asyncio.wait_for(connection.send_text(payload), timeout=self.send_timeout)
        else:
            await connection.send_text(payload)

    async def _handle_failure(self, connection: "PodConnection") -> None:
        if self.on_delivery_failure is not None:
            await self.on_delivery_failure(connection)
        else:
            self.registry.leave(connection.pod_id, connection)
            connection.mark_closed()
