"""ORM models used by the application infrastructure."""

from .user import UserModel
from .event import EventModel
from .registration import RegistrationModel
from .check_in import CheckInModel
from .notification import NotificationModel
from .broadcast import BroadcastModel

__all__ = [
    "UserModel",
    "EventModel",
    "RegistrationModel",
    "CheckInModel",
    "NotificationModel",
    "BroadcastModel",
]
