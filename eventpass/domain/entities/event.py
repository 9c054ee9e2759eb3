"""Domain entity representing an event."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Event:
    """Event organized by one account that attendees register for."""

    id: int | None
    organizer_id: int
    title: str
    description: str | None
    location: str | None
    start_date: datetime
    end_date: datetime | None
    requires_approval: bool
    check_in_enabled: bool
    public_link: str
    created_at: datetime | None

    def is_owned_by(self, account_id: int | None) -> bool:
        """Return ``True`` when ``account_id`` organizes this event."""

        return account_id is not None and self.organizer_id == account_id


__all__ = ["Event"]
