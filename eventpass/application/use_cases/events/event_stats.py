"""Use case summarizing registrations of an event for dashboards."""

from dataclasses import dataclass

from sqlalchemy.orm import Session

from eventpass.domain.entities import RegistrationStatus
from eventpass.infrastructure.repositories import RegistrationRepository

from .get_event import get_owned_event


@dataclass
class EventStats:
    total: int
    pending: int
    approved: int
    rejected: int
    checked_in: int
    checked_out: int


def get_event_stats(session: Session, *, event_id: int, organizer_id: int) -> EventStats:
    """Return registration counts per status for an event the caller organizes."""

    get_owned_event(session, event_id=event_id, organizer_id=organizer_id)
    counts = RegistrationRepository(session).count_by_status(event_id)
    return EventStats(
        total=sum(counts.values()),
        pending=counts.get(RegistrationStatus.PENDING.value, 0),
        approved=counts.get(RegistrationStatus.APPROVED.value, 0),
        rejected=counts.get(RegistrationStatus.REJECTED.value, 0),
        checked_in=counts.get(RegistrationStatus.CHECKED_IN.value, 0),
        checked_out=counts.get(RegistrationStatus.CHECKED_OUT.value, 0),
    )


__all__ = ["EventStats", "get_event_stats"]
