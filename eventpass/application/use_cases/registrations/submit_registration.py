"""Use case for submitting a registration to an event."""

from __future__ import annotations

import logging
from typing import Any
from uuid import uuid4

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eventpass.domain.entities import Event, Registration
from eventpass.domain.exceptions import AlreadyRegisteredError
from eventpass.domain.identity import normalize_email
from eventpass.domain.registration_workflow import initial_status
from eventpass.infrastructure.repositories import RegistrationRepository

from ..events import get_event, get_event_by_public_link

logger = logging.getLogger(__name__)

_ALREADY_REGISTERED = "Ya estás inscrito en este evento"


def _generate_qr_code() -> str:
    return f"QR-{uuid4()}"


def _generate_ticket_link() -> str:
    return f"ticket-{uuid4().hex[:12]}"


def submit_registration(
    session: Session,
    *,
    name: str,
    email: str,
    event_id: int | None = None,
    public_link: str | None = None,
    phone: str | None = None,
    form_data: dict[str, Any] | None = None,
    account_id: int | None = None,
) -> tuple[Registration, Event]:
    """Register ``email`` for the event identified by id or public link.

    A second registration of the same normalized email for the same event
    is refused with :class:`AlreadyRegisteredError` before anything is
    written. Without ``account_id`` the registration is stored as a guest
    ticket and linked later when the owner logs in.
    """

    if event_id is None and not public_link:
        raise ValueError("Se requiere el evento")
    event = (
        get_event(session, event_id)
        if event_id is not None
        else get_event_by_public_link(session, public_link or "")
    )

    normalized_email = normalize_email(email)
    if not name or not name.strip() or not normalized_email:
        raise ValueError("El nombre y el correo electrónico son obligatorios")

    repository = RegistrationRepository(session)
    if repository.get_by_event_and_email(event.id, normalized_email) is not None:
        raise AlreadyRegisteredError(_ALREADY_REGISTERED)

    registration = Registration(
        id=None,
        event_id=event.id,
        user_id=account_id,
        name=name.strip(),
        email=normalized_email,
        phone=phone or None,
        status=initial_status(event.requires_approval),
        qr_code=_generate_qr_code(),
        ticket_link=_generate_ticket_link(),
        form_data=dict(form_data or {}),
    )
    try:
        created = repository.create(registration)
    except IntegrityError as exc:
        # Lost a race against a concurrent submission for the same email.
        session.rollback()
        raise AlreadyRegisteredError(_ALREADY_REGISTERED) from exc

    logger.info(
        "Registration %s created for event %s (account %s, status %s)",
        created.id,
        event.id,
        created.user_id,
        created.status.value,
    )
    return created, event


__all__ = ["submit_registration"]
