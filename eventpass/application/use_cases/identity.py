"""Identity resolution and guest registration healing."""

from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy.orm import Session

from eventpass.domain.entities import User
from eventpass.domain.identity import normalize_email
from eventpass.infrastructure.repositories import RegistrationRepository, UserRepository

logger = logging.getLogger(__name__)


def resolve_account(session: Session, email: str) -> User | None:
    """Return the account registered with ``email`` (normalized), if any."""

    return UserRepository(session).get_by_email(email)


def resolve_account_ids(session: Session, emails: Iterable[str]) -> dict[str, int]:
    """Resolve many emails at once into a ``normalized email -> account id`` map.

    Emails without an account are simply absent from the result.
    """

    return UserRepository(session).get_ids_by_emails(emails)


def heal_guest_registrations(session: Session, *, email: str, account_id: int) -> int:
    """Attach every guest registration made with ``email`` to ``account_id``.

    Only rows without an owner are touched, so repeated calls are no-ops.
    Returns the number of registrations reassigned.
    """

    normalized = normalize_email(email)
    linked = RegistrationRepository(session).link_guest_registrations(normalized, account_id)
    if linked:
        logger.info(
            "Linked %s guest registrations for %s to account %s",
            linked,
            normalized,
            account_id,
        )
    return linked


__all__ = ["heal_guest_registrations", "resolve_account", "resolve_account_ids"]
