"""Transition table for the registration lifecycle.

Every allowed ``(status, action)`` pair is listed in :data:`TRANSITIONS`;
any pair missing from the table is rejected. ``checked_in`` and
``checked_out`` form the only bidirectional edge (re-entry).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Mapping

from .entities import RegistrationAction, RegistrationStatus
from .exceptions import InvalidTransitionError, UnauthorizedError


@dataclass(frozen=True)
class TransitionRule:
    """Target state of a transition and whether the organizer must act."""

    target: RegistrationStatus
    organizer_only: bool = False


TRANSITIONS: Final[Mapping[tuple[RegistrationStatus, RegistrationAction], TransitionRule]] = {
    (RegistrationStatus.PENDING, RegistrationAction.APPROVE): TransitionRule(
        RegistrationStatus.APPROVED, organizer_only=True
    ),
    (RegistrationStatus.PENDING, RegistrationAction.REJECT): TransitionRule(
        RegistrationStatus.REJECTED, organizer_only=True
    ),
    (RegistrationStatus.APPROVED, RegistrationAction.CHECK_IN): TransitionRule(
        RegistrationStatus.CHECKED_IN
    ),
    (RegistrationStatus.CHECKED_IN, RegistrationAction.CHECK_OUT): TransitionRule(
        RegistrationStatus.CHECKED_OUT
    ),
    (RegistrationStatus.CHECKED_OUT, RegistrationAction.CHECK_IN): TransitionRule(
        RegistrationStatus.CHECKED_IN
    ),
}

# Statuses that are announced on the event room for live dashboards.
BROADCAST_STATUSES: Final[frozenset[RegistrationStatus]] = frozenset(
    {
        RegistrationStatus.APPROVED,
        RegistrationStatus.REJECTED,
        RegistrationStatus.CHECKED_IN,
    }
)

# Organizer decisions accepted by bulk updates.
BULK_ACTIONS: Final[Mapping[RegistrationStatus, RegistrationAction]] = {
    RegistrationStatus.APPROVED: RegistrationAction.APPROVE,
    RegistrationStatus.REJECTED: RegistrationAction.REJECT,
}

_REASONS: Final[Mapping[RegistrationStatus, str]] = {
    RegistrationStatus.PENDING: "La inscripción está pendiente de aprobación",
    RegistrationStatus.REJECTED: "La inscripción fue rechazada",
    RegistrationStatus.CHECKED_IN: "La inscripción ya registró su ingreso",
}


def initial_status(requires_approval: bool) -> RegistrationStatus:
    """Return the status assigned to a freshly submitted registration."""

    return RegistrationStatus.PENDING if requires_approval else RegistrationStatus.APPROVED


def next_status(
    current: RegistrationStatus | str,
    action: RegistrationAction | str,
    *,
    actor_is_organizer: bool,
) -> RegistrationStatus:
    """Return the status reached by applying ``action`` to ``current``.

    Raises :class:`InvalidTransitionError` when the pair is not in the
    table and :class:`UnauthorizedError` when an organizer-only decision
    is attempted by someone else. Neither case has side effects.
    """

    current = RegistrationStatus(current)
    try:
        action = RegistrationAction(action)
    except ValueError as exc:
        raise InvalidTransitionError(current.value, str(action)) from exc

    rule = TRANSITIONS.get((current, action))
    if rule is None:
        raise InvalidTransitionError(
            current.value, action.value, _REASONS.get(current)
        )
    if rule.organizer_only and not actor_is_organizer:
        raise UnauthorizedError("Solo el organizador del evento puede decidir la inscripción")
    return rule.target


def is_allowed(current: RegistrationStatus | str, action: RegistrationAction | str) -> bool:
    """Return ``True`` when ``action`` is listed for ``current``."""

    try:
        return (RegistrationStatus(current), RegistrationAction(action)) in TRANSITIONS
    except ValueError:
        return False


__all__ = [
    "BROADCAST_STATUSES",
    "BULK_ACTIONS",
    "TRANSITIONS",
    "TransitionRule",
    "initial_status",
    "is_allowed",
    "next_status",
]
