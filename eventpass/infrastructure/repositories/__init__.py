"""Repository implementations for infrastructure layer."""

from .broadcast_repository import BroadcastRepository
from .check_in_repository import CheckInRepository
from .event_repository import EventRepository
from .notification_repository import NotificationRepository
from .registration_repository import RegistrationRepository
from .user_repository import UserRepository

__all__ = [
    "BroadcastRepository",
    "CheckInRepository",
    "EventRepository",
    "NotificationRepository",
    "RegistrationRepository",
    "UserRepository",
]
