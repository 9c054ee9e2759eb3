"""Use cases for the registration lifecycle."""

from .check_in import (
    ScanVerification,
    check_in_registration,
    check_out_registration,
    list_check_ins,
    verify_scan,
)
from .list_registrations import (
    get_registration,
    get_registration_status,
    list_event_registrations,
    list_user_tickets,
)
from .submit_registration import submit_registration
from .transition_registration import (
    BulkTransitionResult,
    TransitionResult,
    apply_transition,
    bulk_transition_registrations,
    transition_registration,
)

__all__ = [
    "BulkTransitionResult",
    "ScanVerification",
    "TransitionResult",
    "apply_transition",
    "bulk_transition_registrations",
    "check_in_registration",
    "check_out_registration",
    "get_registration",
    "get_registration_status",
    "list_check_ins",
    "list_event_registrations",
    "list_user_tickets",
    "submit_registration",
    "transition_registration",
    "verify_scan",
]
