"""Use case for registering a successful login."""

from dataclasses import replace

from sqlalchemy.orm import Session

from eventpass.infrastructure.repositories import UserRepository
from eventpass.utils import now_in_app_timezone

from ..identity import heal_guest_registrations


def record_login(session: Session, user_id: int) -> None:
    """Persist the last login timestamp and link pending guest tickets."""

    repository = UserRepository(session)
    user = repository.get(user_id)
    if not user:
        return

    repository.update(replace(user, last_login=now_in_app_timezone()))
    heal_guest_registrations(session, email=user.email, account_id=user_id)
