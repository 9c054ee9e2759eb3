"""Domain entities exposed by the application."""

from .broadcast import BroadcastRecord
from .check_in import CheckInRecord, CheckInType
from .event import Event
from .notification import Notification
from .registration import (
    TICKET_STATUSES,
    Registration,
    RegistrationAction,
    RegistrationStatus,
)
from .user import ROLE_ORGANIZER, ROLE_PARTICIPANT, ROLE_VERIFIER, ROLES, User

__all__ = [
    "BroadcastRecord",
    "CheckInRecord",
    "CheckInType",
    "Event",
    "Notification",
    "Registration",
    "RegistrationAction",
    "RegistrationStatus",
    "TICKET_STATUSES",
    "User",
    "ROLES",
    "ROLE_ORGANIZER",
    "ROLE_PARTICIPANT",
    "ROLE_VERIFIER",
]
