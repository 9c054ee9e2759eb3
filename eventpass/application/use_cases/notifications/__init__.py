"""Public helpers for delivering notifications."""

from .broadcast import (
    BroadcastPlan,
    broadcast_to_event,
    deliver_broadcast,
    list_broadcasts,
    prepare_broadcast,
    resolve_broadcast_recipients,
)
from .events import (
    REGISTRATION_UPDATED_EVENT,
    announce_new_registration,
    announce_registration_update,
)
from .fanout import ChunkReport, FanOutEngine, FanOutMessage
from .inbox import list_notifications, mark_notifications_read

__all__ = [
    "BroadcastPlan",
    "ChunkReport",
    "FanOutEngine",
    "FanOutMessage",
    "REGISTRATION_UPDATED_EVENT",
    "announce_new_registration",
    "announce_registration_update",
    "broadcast_to_event",
    "deliver_broadcast",
    "list_broadcasts",
    "list_notifications",
    "mark_notifications_read",
    "prepare_broadcast",
    "resolve_broadcast_recipients",
]
