"""Domain entity representing an attendee registration."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class RegistrationStatus(str, Enum):
    """Lifecycle states of a registration."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"


class RegistrationAction(str, Enum):
    """Actions that move a registration between states."""

    APPROVE = "approve"
    REJECT = "reject"
    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"


TICKET_STATUSES = frozenset(
    {
        RegistrationStatus.APPROVED,
        RegistrationStatus.CHECKED_IN,
        RegistrationStatus.CHECKED_OUT,
    }
)


@dataclass
class Registration:
    """One attendee's relationship to one event."""

    id: int | None
    event_id: int
    user_id: int | None
    name: str
    email: str
    phone: str | None
    status: RegistrationStatus
    qr_code: str
    ticket_link: str
    form_data: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None

    @property
    def is_guest(self) -> bool:
        return self.user_id is None


__all__ = [
    "Registration",
    "RegistrationAction",
    "RegistrationStatus",
    "TICKET_STATUSES",
]
