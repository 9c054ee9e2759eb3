"""Use case for storing the device push token of an account."""

from dataclasses import replace

from sqlalchemy.orm import Session

from eventpass.domain.entities import User
from eventpass.domain.exceptions import NotFoundError
from eventpass.infrastructure.repositories import UserRepository


def update_push_token(session: Session, *, user_id: int, push_token: str | None) -> User:
    """Register ``push_token`` for ``user_id``; ``None`` or blank clears it."""

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise NotFoundError("Usuario no encontrado")

    token = (push_token or "").strip() or None
    return repository.update(replace(user, push_token=token))
