"""Notifications triggered by registration changes."""

from __future__ import annotations

import logging

from eventpass.domain.entities import Event, Registration, RegistrationStatus
from eventpass.domain.registration_workflow import BROADCAST_STATUSES
from eventpass.infrastructure.notifications import event_room, user_room
from eventpass.infrastructure.repositories import EventRepository, UserRepository

from .fanout import FanOutEngine, FanOutMessage

logger = logging.getLogger(__name__)

REGISTRATION_UPDATED_EVENT = "registration-updated"


def _status_message(status: RegistrationStatus, event_title: str) -> tuple[str, str]:
    if status is RegistrationStatus.APPROVED:
        return (
            "¡Entrada aprobada!",
            f"Tu entrada para '{event_title}' fue aprobada. Toca para verla.",
        )
    if status is RegistrationStatus.REJECTED:
        return (
            "Actualización de inscripción",
            f"Lamentablemente tu inscripción para '{event_title}' no fue aprobada.",
        )
    if status is RegistrationStatus.CHECKED_IN:
        return (
            "¡Ingreso registrado!",
            f"Registraste tu ingreso a '{event_title}'. ¡Disfruta el evento!",
        )
    return (
        "Actualización de inscripción",
        f"Tu inscripción para '{event_title}' cambió a estado '{status.value}'.",
    )


def _resolve_registrant(engine: FanOutEngine, registration: Registration) -> int | None:
    if registration.user_id:
        return registration.user_id
    with engine.session_factory() as session:
        account = UserRepository(session).get_by_email(registration.email)
    return account.id if account else None


def _load_event(engine: FanOutEngine, event_id: int) -> Event | None:
    with engine.session_factory() as session:
        return EventRepository(session).get(event_id)


def announce_registration_update(
    registration: Registration, *, engine: FanOutEngine
) -> int | None:
    """Notify the registrant about the new status of ``registration``.

    Exactly one fan-out is sent to the resolved registrant (guests without
    an account get none). Approvals, rejections and check-ins are also
    emitted as ``registration-updated`` to the registrant's room and to the
    event room. Returns the notified account id, if any.
    """

    event = _load_event(engine, registration.event_id)
    if event is None:
        logger.warning(
            "Skipping announcement for registration %s: event %s not found",
            registration.id,
            registration.event_id,
        )
        return None

    recipient_id = _resolve_registrant(engine, registration)
    status = RegistrationStatus(registration.status)
    if recipient_id is not None:
        title, body = _status_message(status, event.title)
        engine.deliver(
            [recipient_id],
            FanOutMessage(
                title=title,
                body=body,
                type=f"registration_{status.value}",
                related_id=str(registration.id),
                data={"eventId": event.id, "status": status.value},
            ),
        )

    if status in BROADCAST_STATUSES:
        payload = {
            "registration_id": registration.id,
            "event_id": registration.event_id,
            "status": status.value,
        }
        try:
            if recipient_id is not None:
                engine.realtime.emit(user_room(recipient_id), REGISTRATION_UPDATED_EVENT, payload)
            engine.realtime.emit(event_room(event.id), REGISTRATION_UPDATED_EVENT, payload)
        except Exception:  # realtime delivery is best effort
            logger.warning(
                "Realtime update for registration %s could not be emitted",
                registration.id,
                exc_info=True,
            )
    return recipient_id


def announce_new_registration(
    registration: Registration, event: Event, *, engine: FanOutEngine
) -> None:
    """Tell the organizer about a new registration and confirm it to the registrant."""

    engine.deliver(
        [event.organizer_id],
        FanOutMessage(
            title="Nueva inscripción",
            body=f"{registration.name} se inscribió en '{event.title}'",
            type="new_registration",
            related_id=str(event.id),
            data={"registrationId": registration.id},
        ),
    )

    recipient_id = _resolve_registrant(engine, registration)
    if recipient_id is None or recipient_id == event.organizer_id:
        return

    if registration.status is RegistrationStatus.PENDING:
        body = (
            f"Te inscribiste en '{event.title}'. Tu entrada está pendiente de aprobación."
        )
    else:
        body = f"Te inscribiste en '{event.title}'. ¡Tu entrada está lista!"
    engine.deliver(
        [recipient_id],
        FanOutMessage(
            title="¡Inscripción exitosa!",
            body=body,
            type="registration_successful",
            related_id=str(registration.id),
            data={"eventId": event.id, "status": registration.status.value},
        ),
    )


__all__ = [
    "REGISTRATION_UPDATED_EVENT",
    "announce_new_registration",
    "announce_registration_update",
]
