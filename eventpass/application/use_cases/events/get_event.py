"""Use cases for reading events."""

from sqlalchemy.orm import Session

from eventpass.domain.entities import Event
from eventpass.domain.exceptions import NotFoundError, UnauthorizedError
from eventpass.infrastructure.repositories import EventRepository


def get_event(session: Session, event_id: int) -> Event:
    """Return the event or raise :class:`NotFoundError`."""

    event = EventRepository(session).get(event_id)
    if event is None:
        raise NotFoundError("Evento no encontrado")
    return event


def get_event_by_public_link(session: Session, public_link: str) -> Event:
    event = EventRepository(session).get_by_public_link(public_link)
    if event is None:
        raise NotFoundError("Evento no encontrado")
    return event


def get_owned_event(session: Session, *, event_id: int, organizer_id: int) -> Event:
    """Return the event only when ``organizer_id`` organizes it."""

    event = get_event(session, event_id)
    if not event.is_owned_by(organizer_id):
        raise UnauthorizedError("Solo el organizador puede gestionar este evento")
    return event


__all__ = ["get_event", "get_event_by_public_link", "get_owned_event"]
