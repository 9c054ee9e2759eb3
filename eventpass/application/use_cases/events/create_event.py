"""Use case for creating events."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy.orm import Session

from eventpass.domain.entities import Event
from eventpass.domain.exceptions import NotFoundError
from eventpass.infrastructure.repositories import EventRepository, UserRepository
from eventpass.utils import now_in_app_timezone


def _generate_public_link() -> str:
    return uuid4().hex[:8]


def create_event(
    session: Session,
    *,
    organizer_id: int,
    title: str,
    start_date: datetime,
    end_date: datetime | None = None,
    description: str | None = None,
    location: str | None = None,
    requires_approval: bool = False,
    check_in_enabled: bool = True,
) -> Event:
    """Create an event owned by ``organizer_id`` with a fresh public link."""

    if not title or not title.strip():
        raise ValueError("El título es obligatorio")
    if end_date is not None and end_date < start_date:
        raise ValueError("La fecha de fin no puede ser anterior a la de inicio")
    if UserRepository(session).get(organizer_id) is None:
        raise NotFoundError("Organizador no encontrado")

    event = Event(
        id=None,
        organizer_id=organizer_id,
        title=title.strip(),
        description=description,
        location=location,
        start_date=start_date,
        end_date=end_date,
        requires_approval=requires_approval,
        check_in_enabled=check_in_enabled,
        public_link=_generate_public_link(),
        created_at=now_in_app_timezone(),
    )
    return EventRepository(session).create(event)


__all__ = ["create_event"]
