"""Domain entity representing an in-app notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Notification:
    """Inbox message delivered to a specific account."""

    id: int | None
    user_id: int
    title: str
    body: str
    type: str
    related_id: str | None = None
    read: bool = False
    created_at: datetime | None = None


__all__ = ["Notification"]
