"""Realtime notification helpers for the infrastructure layer."""

from .manager import (
    RealtimeConnectionManager,
    event_room,
    realtime_manager,
    user_room,
)
from .publisher import (
    NOTIFICATION_EVENT,
    NotificationPublisher,
    notification_publisher,
    serialize_notification,
)
from .realtime import RealtimeEventPublisher, realtime_event_publisher

__all__ = [
    "NOTIFICATION_EVENT",
    "NotificationPublisher",
    "RealtimeConnectionManager",
    "RealtimeEventPublisher",
    "event_room",
    "notification_publisher",
    "realtime_event_publisher",
    "realtime_manager",
    "serialize_notification",
    "user_room",
]
