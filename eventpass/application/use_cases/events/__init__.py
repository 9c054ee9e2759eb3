"""Use cases for events."""

from .create_event import create_event
from .event_stats import EventStats, get_event_stats
from .get_event import get_event, get_event_by_public_link, get_owned_event

__all__ = [
    "EventStats",
    "create_event",
    "get_event",
    "get_event_by_public_link",
    "get_event_stats",
    "get_owned_event",
]
