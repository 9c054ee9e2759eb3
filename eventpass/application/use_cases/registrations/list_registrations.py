"""Read-side use cases for registrations."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from eventpass.domain.entities import TICKET_STATUSES, Registration, RegistrationStatus
from eventpass.domain.exceptions import NotFoundError
from eventpass.domain.identity import normalize_email
from eventpass.infrastructure.repositories import RegistrationRepository, UserRepository

from ..events import get_event, get_owned_event


def list_event_registrations(
    session: Session,
    *,
    event_id: int,
    organizer_id: int,
    status: RegistrationStatus | None = None,
    skip: int = 0,
    limit: int = 50,
) -> Sequence[Registration]:
    """Return registrations of an event the caller organizes."""

    get_owned_event(session, event_id=event_id, organizer_id=organizer_id)
    return RegistrationRepository(session).list_for_event(
        event_id, status=status, skip=skip, limit=limit
    )


def get_registration(session: Session, registration_id: int) -> Registration:
    registration = RegistrationRepository(session).get(registration_id)
    if registration is None:
        raise NotFoundError("Inscripción no encontrada")
    return registration


def list_user_tickets(session: Session, *, user_id: int) -> list[Registration]:
    """Return the usable tickets of an account.

    Owned registrations and registrations made with the account email are
    merged (once each) and only approved or attended tickets are kept.
    """

    user = UserRepository(session).get(user_id)
    if user is None:
        raise NotFoundError("Usuario no encontrado")

    repository = RegistrationRepository(session)
    merged: dict[int, Registration] = {}
    for registration in repository.list_for_user(user_id):
        merged[registration.id] = registration
    for registration in repository.list_for_email(user.email):
        merged.setdefault(registration.id, registration)

    tickets = [r for r in merged.values() if r.status in TICKET_STATUSES]
    tickets.sort(key=lambda r: (r.created_at is not None, r.created_at, r.id), reverse=True)
    return tickets


def get_registration_status(
    session: Session,
    *,
    event_id: int,
    account_id: int | None = None,
    email: str | None = None,
) -> Registration | None:
    """Return the caller's registration for ``event_id``, if any.

    Signed-in callers are matched by ownership first and then by their
    account email; ``email`` is only consulted for guests.
    """

    get_event(session, event_id)
    repository = RegistrationRepository(session)

    if account_id is not None:
        user = UserRepository(session).get(account_id)
        if user is None:
            return None
        registration = repository.get_by_event_and_user(event_id, account_id)
        if registration is None:
            registration = repository.get_by_event_and_email(event_id, user.email)
        return registration

    if email and normalize_email(email):
        return repository.get_by_event_and_email(event_id, email)
    return None


__all__ = [
    "get_registration",
    "get_registration_status",
    "list_event_registrations",
    "list_user_tickets",
]
