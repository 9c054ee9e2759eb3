"""Connection management helpers for realtime websockets."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, DefaultDict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


def user_room(user_id: int) -> str:
    """Return the private room name of ``user_id``."""

    return f"user:{user_id}"


def event_room(event_id: int) -> str:
    """Return the room name watched by dashboards of ``event_id``."""

    return f"event:{event_id}"


class RealtimeConnectionManager:
    """Manage active websocket connections grouped by room."""

    def __init__(self) -> None:
        self._rooms: DefaultDict[str, Set[WebSocket]] = defaultdict(set)

    async def connect(self, room: str, websocket: WebSocket) -> None:
        """Accept the websocket connection and register it in ``room``."""

        await websocket.accept()
        self.join(room, websocket)

    def join(self, room: str, websocket: WebSocket) -> None:
        self._rooms[room].add(websocket)

    def leave(self, room: str, websocket: WebSocket) -> None:
        """Remove ``websocket`` from ``room``."""

        connections = self._rooms.get(room)
        if connections is None:
            return
        connections.discard(websocket)
        if not connections:
            self._rooms.pop(room, None)

    def disconnect(self, websocket: WebSocket) -> None:
        """Remove ``websocket`` from every room it joined."""

        for room in [name for name, members in self._rooms.items() if websocket in members]:
            self.leave(room, websocket)

    def room_size(self, room: str) -> int:
        return len(self._rooms.get(room, ()))

    async def send_to_room(self, room: str, message: dict[str, Any]) -> None:
        """Send ``message`` to every active connection in ``room``."""

        connections = list(self._rooms.get(room, set()))
        for connection in connections:
            try:
                await connection.send_json(message)
            except Exception:  # pragma: no cover - stale sockets are dropped
                logger.debug("Dropping stale websocket from room %s", room)
                self.disconnect(connection)


realtime_manager = RealtimeConnectionManager()


__all__ = [
    "RealtimeConnectionManager",
    "event_room",
    "realtime_manager",
    "user_room",
]
