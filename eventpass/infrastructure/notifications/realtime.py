"""Helpers to broadcast realtime events to connected clients."""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any, Iterable, Set

from anyio import from_thread

from .manager import RealtimeConnectionManager, realtime_manager, user_room

logger = logging.getLogger(__name__)


class RealtimeEventPublisher:
    """Dispatch structured realtime events to websocket rooms.

    Delivery is best effort: nothing is acknowledged or retried and
    scheduling problems are logged instead of raised.
    """

    def __init__(self, manager: RealtimeConnectionManager) -> None:
        self._manager = manager

    def emit(self, room: str, event_name: str, payload: Any) -> None:
        """Schedule an ``event_name`` event for every socket in ``room``."""

        if not room:
            return

        message = {"type": event_name, "data": copy.deepcopy(payload)}
        self._schedule_send(room, message)

    def emit_to_users(
        self,
        user_ids: Iterable[int],
        event_name: str,
        payload: Any,
    ) -> None:
        """Emit the same event to the private room of each user once."""

        seen: Set[int] = set()
        for user_id in user_ids:
            if not user_id or user_id in seen:
                continue
            seen.add(user_id)
            self.emit(user_room(user_id), event_name, payload)

    def _schedule_send(self, room: str, message: dict[str, Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(self._manager.send_to_room, room, message)
            except RuntimeError:
                logger.debug("No event loop available; realtime event for %s dropped", room)
        else:
            loop.create_task(self._manager.send_to_room(room, message))


realtime_event_publisher = RealtimeEventPublisher(realtime_manager)


__all__ = ["RealtimeEventPublisher", "realtime_event_publisher"]
