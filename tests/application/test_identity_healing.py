"""Tests for identity resolution and guest registration healing."""

from eventpass.application.use_cases.identity import (
    heal_guest_registrations,
    resolve_account,
    resolve_account_ids,
)
from eventpass.application.use_cases.users import create_user, record_login
from eventpass.infrastructure.repositories import RegistrationRepository, UserRepository


def _owners(session, registration_ids):
    repository = RegistrationRepository(session)
    return [repository.get_fresh(registration_id).user_id for registration_id in registration_ids]


def test_resolve_normalizes_email(session, make_user) -> None:
    account = make_user("a@x.com")

    assert resolve_account(session, "  A@X.com ").id == account.id
    assert resolve_account(session, "nobody@x.com") is None
    assert resolve_account_ids(session, ["A@x.com", "nobody@x.com"]) == {"a@x.com": account.id}


def test_heal_is_idempotent_and_leaves_other_emails(
    session, make_user, make_event, make_registration
) -> None:
    account = make_user("a@x.com")
    first_event = make_event(title="Day one")
    second_event = make_event(title="Day two")
    mine = [
        make_registration(first_event, "a@x.com"),
        make_registration(second_event, "a@x.com"),
    ]
    other = make_registration(first_event, "b@x.com")

    assert heal_guest_registrations(session, email="a@x.com", account_id=account.id) == 2
    after_first = _owners(session, [r.id for r in mine] + [other.id])

    assert heal_guest_registrations(session, email="a@x.com", account_id=account.id) == 0
    after_second = _owners(session, [r.id for r in mine] + [other.id])

    assert after_first == after_second == [account.id, account.id, None]


def test_heal_never_steals_owned_registrations(
    session, make_user, make_event, make_registration
) -> None:
    owner = make_user("owner@x.com")
    newcomer = make_user("a@x.com")
    event = make_event()
    owned = make_registration(event, "a@x.com", user_id=owner.id)

    assert heal_guest_registrations(session, email="a@x.com", account_id=newcomer.id) == 0
    assert _owners(session, [owned.id]) == [owner.id]


def test_signup_links_previous_guest_tickets(session, make_event, make_registration) -> None:
    event = make_event()
    guest_ticket = make_registration(event, "new@x.com")

    account = create_user(session, name="New", email="New@X.com", password="Secret123!")

    assert account.email == "new@x.com"
    assert _owners(session, [guest_ticket.id]) == [account.id]


def test_login_links_guest_tickets_created_after_signup(
    session, make_user, make_event, make_registration
) -> None:
    account = make_user("a@x.com")
    event = make_event()
    guest_ticket = make_registration(event, "a@x.com")

    record_login(session, account.id)

    assert _owners(session, [guest_ticket.id]) == [account.id]
    assert UserRepository(session).get(account.id).last_login is not None
