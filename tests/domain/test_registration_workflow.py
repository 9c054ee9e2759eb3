"""Tests for the registration transition table."""

import itertools

import pytest

from eventpass.domain.entities import RegistrationAction, RegistrationStatus
from eventpass.domain.exceptions import InvalidTransitionError, UnauthorizedError
from eventpass.domain.registration_workflow import (
    TRANSITIONS,
    initial_status,
    is_allowed,
    next_status,
)

ALLOWED = {
    (RegistrationStatus.PENDING, RegistrationAction.APPROVE): RegistrationStatus.APPROVED,
    (RegistrationStatus.PENDING, RegistrationAction.REJECT): RegistrationStatus.REJECTED,
    (RegistrationStatus.APPROVED, RegistrationAction.CHECK_IN): RegistrationStatus.CHECKED_IN,
    (RegistrationStatus.CHECKED_IN, RegistrationAction.CHECK_OUT): RegistrationStatus.CHECKED_OUT,
    (RegistrationStatus.CHECKED_OUT, RegistrationAction.CHECK_IN): RegistrationStatus.CHECKED_IN,
}

ALL_PAIRS = list(itertools.product(RegistrationStatus, RegistrationAction))


def test_table_lists_exactly_the_allowed_edges() -> None:
    assert {pair: rule.target for pair, rule in TRANSITIONS.items()} == ALLOWED


@pytest.mark.parametrize(("status", "action"), ALL_PAIRS)
def test_every_pair_is_either_allowed_or_rejected(status, action) -> None:
    if (status, action) in ALLOWED:
        assert next_status(status, action, actor_is_organizer=True) is ALLOWED[(status, action)]
        assert is_allowed(status, action)
    else:
        with pytest.raises(InvalidTransitionError) as exc_info:
            next_status(status, action, actor_is_organizer=True)
        assert exc_info.value.current_status == status.value
        assert exc_info.value.action == action.value
        assert not is_allowed(status, action)


@pytest.mark.parametrize("action", [RegistrationAction.APPROVE, RegistrationAction.REJECT])
def test_decisions_require_the_organizer(action) -> None:
    with pytest.raises(UnauthorizedError):
        next_status(RegistrationStatus.PENDING, action, actor_is_organizer=False)


def test_admission_does_not_require_the_organizer() -> None:
    assert (
        next_status("approved", "check_in", actor_is_organizer=False)
        is RegistrationStatus.CHECKED_IN
    )


def test_unknown_action_is_an_invalid_transition() -> None:
    with pytest.raises(InvalidTransitionError):
        next_status(RegistrationStatus.PENDING, "cancel", actor_is_organizer=True)


@pytest.mark.parametrize(
    ("requires_approval", "expected"),
    [(True, RegistrationStatus.PENDING), (False, RegistrationStatus.APPROVED)],
)
def test_initial_status(requires_approval, expected) -> None:
    assert initial_status(requires_approval) is expected
