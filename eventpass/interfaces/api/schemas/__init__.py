from .auth import PushTokenUpdate, SignupRequest, Token
from .broadcast import BroadcastAccepted, BroadcastCreate, BroadcastRead
from .event import EventCreate, EventRead, EventStatsRead
from .notification import (
    NotificationMarkReadRequest,
    NotificationMarkReadResult,
    NotificationRead,
)
from .registration import (
    BulkStatusUpdate,
    BulkStatusUpdateResult,
    CheckInRead,
    CheckInRequest,
    RegistrationCreate,
    RegistrationLookup,
    RegistrationRead,
    RegistrationStatusUpdate,
    ScanRequest,
    ScanResult,
)
from .user import UserRead

__all__ = [
    "BroadcastAccepted",
    "BroadcastCreate",
    "BroadcastRead",
    "BulkStatusUpdate",
    "BulkStatusUpdateResult",
    "CheckInRead",
    "CheckInRequest",
    "EventCreate",
    "EventRead",
    "EventStatsRead",
    "NotificationMarkReadRequest",
    "NotificationMarkReadResult",
    "NotificationRead",
    "PushTokenUpdate",
    "RegistrationCreate",
    "RegistrationLookup",
    "RegistrationRead",
    "RegistrationStatusUpdate",
    "ScanRequest",
    "ScanResult",
    "SignupRequest",
    "Token",
    "UserRead",
]
