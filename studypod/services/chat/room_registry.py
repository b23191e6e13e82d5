# studypod/services/chat/room_registry.py
from typing import Dict, List, TYPE_CHECKING, Any
import logging

if TYPE_CHECKING:
    from .connection_handler import PodConnection

logger = logging.getLogger(__name__)

class RoomRegistry:
    """Process-local map of pod id -> live connections in that pod's room.

    None of the methods await, so each call is atomic with respect to the
    event loop. Rooms keep join order, which is also the fan-out order.
    """

    def __init__(self):
        # {pod_id: {connection_id: connection}}
        self._rooms: Dict[str, Dict[str, "PodConnection"]] = {}

    def join(self, pod_id: Any, connection: "PodConnection") -> bool:
        """Add connection to the pod's room. Returns False if it was already there."""
        room_key = str(pod_id)
        room = self._rooms.setdefault(room_key, {})

        if connection.connection_id in room:
            return False

        room[connection.connection_id] = connection
        logger.info(f"Connection {connection.connection_id} joined pod {room_key}. Room size: {len(room)}")
        return True

    def leave(self, pod_id: Any, connection: "PodConnection") -> bool:
        """Remove connection from the pod's room, pruning the room when it empties."""
        room_key = str(pod_id)
        room = self._rooms.get(room_key)

        if not room or room.pop(connection.connection_id, None) is None:
            return False

        if not room:
            del self._rooms[room_key]
        logger.info(f"Connection {connection.connection_id} left pod {room_key}")
        return True

    def members_of(self, pod_id: Any) -> List["PodConnection"]:
        """Snapshot of the room; an unknown pod yields an empty list."""
        return list(self._rooms.get(str(pod_id), {}).values())

    def online_user_ids(self, pod_id: Any) -> List[str]:
        """Distinct user ids present in the room, in join order"""
        seen: Dict[str, None] = {}
        for connection in self.members_of(pod_id):
            if connection.user_id is not None:
                seen.setdefault(str(connection.user_id), None)
        return list(seen)

    @property
    def room_count(self) -> int:
        return len(self._rooms)

    @property
    def connection_count(self) -> int:
        return sum(len(room) for room in self._rooms.values())
