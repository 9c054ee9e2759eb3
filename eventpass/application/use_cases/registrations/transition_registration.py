"""Use cases that move registrations through their lifecycle."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from eventpass.domain.entities import (
    CheckInRecord,
    CheckInType,
    Registration,
    RegistrationAction,
    RegistrationStatus,
)
from eventpass.domain.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    UnauthorizedError,
)
from eventpass.domain.registration_workflow import BULK_ACTIONS, next_status
from eventpass.infrastructure.repositories import (
    CheckInRepository,
    EventRepository,
    RegistrationRepository,
)
from eventpass.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

_CHECK_IN_TYPES = {
    RegistrationAction.CHECK_IN: CheckInType.CHECK_IN,
    RegistrationAction.CHECK_OUT: CheckInType.CHECK_OUT,
}


@dataclass
class TransitionResult:
    registration: Registration
    previous_status: RegistrationStatus
    check_in: CheckInRecord | None = None


@dataclass
class BulkTransitionResult:
    updated: int
    total: int
    registrations: list[Registration] = field(default_factory=list)
    failures: dict[int, str] = field(default_factory=dict)


def apply_transition(
    session: Session,
    *,
    registration_id: int,
    action: RegistrationAction | str,
    actor_id: int | None,
) -> TransitionResult:
    """Validate and persist one transition.

    The guard is evaluated against a freshly read status and the write is
    a compare-and-set on that status, so of two concurrent identical
    actions only one succeeds; the other gets :class:`InvalidTransitionError`.
    Check-in and check-out append their audit record in the same commit.
    """

    repository = RegistrationRepository(session)
    registration = repository.get_fresh(registration_id)
    if registration is None:
        raise NotFoundError("Inscripción no encontrada")

    event = EventRepository(session).get(registration.event_id)
    if event is None:
        raise NotFoundError("Evento no encontrado")

    target = next_status(
        registration.status,
        action,
        actor_is_organizer=event.is_owned_by(actor_id),
    )
    action = RegistrationAction(action)
    check_in_type = _CHECK_IN_TYPES.get(action)
    if check_in_type is not None and not event.check_in_enabled:
        raise InvalidTransitionError(
            registration.status.value,
            action.value,
            "El evento no tiene habilitado el control de ingreso",
        )

    swapped = repository.compare_and_set_status(
        registration_id,
        expected=registration.status,
        new=target,
        commit=check_in_type is None,
    )
    if not swapped:
        session.rollback()
        current = repository.get_fresh(registration_id)
        current_status = current.status.value if current else registration.status.value
        logger.info(
            "Registration %s changed concurrently; %s rejected (now %s)",
            registration_id,
            action.value,
            current_status,
        )
        raise InvalidTransitionError(current_status, action.value)

    record = None
    if check_in_type is not None:
        record = CheckInRepository(session).create(
            CheckInRecord(
                id=None,
                registration_id=registration_id,
                verifier_id=actor_id,
                type=check_in_type,
                timestamp=now_in_app_timezone(),
            )
        )

    return TransitionResult(
        registration=replace(registration, status=target),
        previous_status=registration.status,
        check_in=record,
    )


def transition_registration(
    session: Session,
    *,
    registration_id: int,
    action: RegistrationAction | str,
    actor_id: int | None,
) -> Registration:
    """Apply ``action`` to the registration and return it with its new status."""

    return apply_transition(
        session,
        registration_id=registration_id,
        action=action,
        actor_id=actor_id,
    ).registration


def bulk_transition_registrations(
    session: Session,
    *,
    registration_ids: Sequence[int],
    target_status: RegistrationStatus | str,
    actor_id: int,
) -> BulkTransitionResult:
    """Approve or reject many registrations, each one independently.

    Failures are collected per id and never abort the remaining updates.
    """

    try:
        action = BULK_ACTIONS[RegistrationStatus(target_status)]
    except (KeyError, ValueError) as exc:
        raise ValueError("Estado no permitido para actualización masiva") from exc

    result = BulkTransitionResult(updated=0, total=len(registration_ids))
    for registration_id in registration_ids:
        try:
            registration = transition_registration(
                session,
                registration_id=registration_id,
                action=action,
                actor_id=actor_id,
            )
        except (NotFoundError, InvalidTransitionError, UnauthorizedError) as exc:
            result.failures[registration_id] = str(exc)
            continue
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception(
                "Bulk %s failed to update registration %s", action.value, registration_id
            )
            result.failures[registration_id] = str(exc)
            continue
        result.updated += 1
        result.registrations.append(registration)

    if result.failures:
        logger.info(
            "Bulk %s updated %s of %s registrations",
            action.value,
            result.updated,
            result.total,
        )
    return result


__all__ = [
    "BulkTransitionResult",
    "TransitionResult",
    "apply_transition",
    "bulk_transition_registrations",
    "transition_registration",
]
