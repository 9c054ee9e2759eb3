"""QR scan verification and venue admission."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from sqlalchemy.orm import Session

from eventpass.domain.entities import (
    CheckInRecord,
    Event,
    Registration,
    RegistrationAction,
    RegistrationStatus,
)
from eventpass.domain.exceptions import NotFoundError
from eventpass.infrastructure.repositories import (
    CheckInRepository,
    EventRepository,
    RegistrationRepository,
)

from .transition_registration import TransitionResult, apply_transition


@dataclass
class ScanVerification:
    """Verdict shown to the verifier after scanning a code."""

    registration: Registration
    event: Event
    already_checked_in: bool


def verify_scan(session: Session, *, code: str) -> ScanVerification:
    """Resolve a scanned QR code without changing anything.

    A ticket that is already checked in is reported through
    ``already_checked_in`` rather than as an error.
    """

    code = (code or "").strip()
    if not code:
        raise ValueError("El código QR es obligatorio")

    registration = RegistrationRepository(session).get_by_qr_code(code)
    if registration is None:
        raise NotFoundError("Código QR inválido")
    event = EventRepository(session).get(registration.event_id)
    if event is None:
        raise NotFoundError("Evento no encontrado")

    return ScanVerification(
        registration=registration,
        event=event,
        already_checked_in=registration.status is RegistrationStatus.CHECKED_IN,
    )


def check_in_registration(
    session: Session, *, registration_id: int, verifier_id: int | None
) -> TransitionResult:
    """Admit the attendee; ``result.check_in`` holds the appended record."""

    return apply_transition(
        session,
        registration_id=registration_id,
        action=RegistrationAction.CHECK_IN,
        actor_id=verifier_id,
    )


def check_out_registration(
    session: Session, *, registration_id: int, verifier_id: int | None
) -> TransitionResult:
    """Record the attendee leaving the venue."""

    return apply_transition(
        session,
        registration_id=registration_id,
        action=RegistrationAction.CHECK_OUT,
        actor_id=verifier_id,
    )


def list_check_ins(session: Session, *, registration_id: int) -> Sequence[CheckInRecord]:
    """Return the forensic check-in log of a registration, newest first."""

    if RegistrationRepository(session).get(registration_id) is None:
        raise NotFoundError("Inscripción no encontrada")
    return CheckInRepository(session).list_for_registration(registration_id)


__all__ = [
    "ScanVerification",
    "check_in_registration",
    "check_out_registration",
    "list_check_ins",
    "verify_scan",
]
