"""Domain entity for organizer broadcast history."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class BroadcastRecord:
    """Write-once audit entry of an organizer mass message."""

    id: int | None
    event_id: int
    organizer_id: int
    title: str
    message: str
    sent_at: datetime | None


__all__ = ["BroadcastRecord"]
