"""Organizer broadcasts to everyone registered for an event."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from eventpass.domain.entities import BroadcastRecord
from eventpass.infrastructure.repositories import BroadcastRepository, RegistrationRepository
from eventpass.utils import now_in_app_timezone

from ..events import get_owned_event
from ..identity import resolve_account_ids
from .fanout import FanOutEngine, FanOutMessage

logger = logging.getLogger(__name__)


@dataclass
class BroadcastPlan:
    """Recipients and content of a broadcast, resolved at request time."""

    event_id: int
    organizer_id: int
    title: str
    message: str
    recipient_ids: list[int] = field(default_factory=list)

    @property
    def recipient_count(self) -> int:
        return len(self.recipient_ids)


def resolve_broadcast_recipients(
    session: Session, *, event_id: int, organizer_id: int
) -> list[int]:
    """Return the distinct accounts that should receive an event broadcast.

    Registrations owned by an account contribute that account; guest
    registrations contribute the account their email resolves to, if any.
    The organizer is never included.
    """

    registrations = RegistrationRepository(session).list_for_event(event_id)

    explicit_ids = {
        registration.user_id
        for registration in registrations
        if registration.user_id is not None and registration.user_id != organizer_id
    }
    guest_emails = [
        registration.email for registration in registrations if registration.user_id is None
    ]
    resolved_ids = {
        account_id
        for account_id in resolve_account_ids(session, guest_emails).values()
        if account_id != organizer_id
    }

    recipients = sorted(explicit_ids | resolved_ids)
    logger.info(
        "Broadcast for event %s targets %s accounts (%s explicit, %s resolved from %s guests)",
        event_id,
        len(recipients),
        len(explicit_ids),
        len(resolved_ids),
        len(guest_emails),
    )
    return recipients


def prepare_broadcast(
    session: Session,
    *,
    event_id: int,
    organizer_id: int,
    title: str | None,
    message: str,
) -> BroadcastPlan:
    """Validate the request and snapshot the recipient set."""

    if not message or not message.strip():
        raise ValueError("El mensaje es obligatorio")

    event = get_owned_event(session, event_id=event_id, organizer_id=organizer_id)
    resolved_title = (title or "").strip() or f"Novedades: {event.title}"
    return BroadcastPlan(
        event_id=event.id,
        organizer_id=organizer_id,
        title=resolved_title,
        message=message.strip(),
        recipient_ids=resolve_broadcast_recipients(
            session, event_id=event.id, organizer_id=organizer_id
        ),
    )


def deliver_broadcast(plan: BroadcastPlan, *, engine: FanOutEngine) -> None:
    """Fan the broadcast out and record it in the audit history."""

    engine.deliver(
        plan.recipient_ids,
        FanOutMessage(
            title=plan.title,
            body=plan.message,
            type="broadcast",
            related_id=str(plan.event_id),
            data={"eventId": plan.event_id},
        ),
    )

    session = engine.session_factory()
    try:
        BroadcastRepository(session).create(
            BroadcastRecord(
                id=None,
                event_id=plan.event_id,
                organizer_id=plan.organizer_id,
                title=plan.title,
                message=plan.message,
                sent_at=now_in_app_timezone(),
            )
        )
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Could not save broadcast history for event %s", plan.event_id)
    finally:
        session.close()


def broadcast_to_event(
    session: Session,
    *,
    event_id: int,
    organizer_id: int,
    title: str | None,
    message: str,
    engine: FanOutEngine,
) -> int:
    """Send a broadcast synchronously and return the number of recipients."""

    plan = prepare_broadcast(
        session,
        event_id=event_id,
        organizer_id=organizer_id,
        title=title,
        message=message,
    )
    deliver_broadcast(plan, engine=engine)
    return plan.recipient_count


def list_broadcasts(
    session: Session, *, event_id: int, organizer_id: int
) -> Sequence[BroadcastRecord]:
    get_owned_event(session, event_id=event_id, organizer_id=organizer_id)
    return BroadcastRepository(session).list_for_event(event_id)


__all__ = [
    "BroadcastPlan",
    "broadcast_to_event",
    "deliver_broadcast",
    "list_broadcasts",
    "prepare_broadcast",
    "resolve_broadcast_recipients",
]
