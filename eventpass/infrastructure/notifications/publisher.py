"""Serialization of notifications pushed to websocket subscribers."""

from __future__ import annotations

from typing import Any

from eventpass.domain.entities import Notification

from .manager import user_room
from .realtime import RealtimeEventPublisher, realtime_event_publisher

NOTIFICATION_EVENT = "notification"


class NotificationPublisher:
    """Serialize notifications and emit them to the recipient's room."""

    def __init__(self, realtime: RealtimeEventPublisher) -> None:
        self._realtime = realtime

    def dispatch(self, notification: Notification) -> None:
        """Schedule ``notification`` to be delivered to its recipient."""

        self._realtime.emit(
            user_room(notification.user_id),
            NOTIFICATION_EVENT,
            serialize_notification(notification),
        )


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "user_id": notification.user_id,
        "title": notification.title,
        "body": notification.body,
        "type": notification.type,
        "related_id": notification.related_id,
        "read": notification.read,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
    }


notification_publisher = NotificationPublisher(realtime_event_publisher)


__all__ = [
    "NOTIFICATION_EVENT",
    "NotificationPublisher",
    "notification_publisher",
    "serialize_notification",
]
