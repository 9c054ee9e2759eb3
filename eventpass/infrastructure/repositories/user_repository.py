"""Persistence layer for account data."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from eventpass.domain.entities import User
from eventpass.domain.identity import normalize_email
from eventpass.infrastructure.models import UserModel
from eventpass.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        normalized = normalize_email(email)
        if not normalized:
            return None
        model = (
            self.session.query(UserModel)
            .filter(func.lower(UserModel.email) == normalized)
            .first()
        )
        return self._to_entity(model) if model else None

    def get_ids_by_emails(self, emails: Iterable[str]) -> dict[str, int]:
        """Return a ``normalized email -> user id`` map for known accounts."""

        normalized = {normalize_email(email) for email in emails}
        normalized.discard("")
        if not normalized:
            return {}
        query = self.session.query(UserModel.id, UserModel.email).filter(
            func.lower(UserModel.email).in_(normalized)
        )
        return {normalize_email(email): user_id for user_id, email in query.all()}

    def get_push_tokens(self, user_ids: Sequence[int]) -> dict[int, str]:
        """Return the registered push token of every account that has one."""

        if not user_ids:
            return {}
        query = (
            self.session.query(UserModel.id, UserModel.push_token)
            .filter(UserModel.id.in_(set(user_ids)))
            .filter(UserModel.push_token.isnot(None))
        )
        return {user_id: token for user_id, token in query.all() if token}

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self.session.get(UserModel, user.id) if user.id is not None else None
        if not model:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.name = user.name
        model.email = normalize_email(user.email)
        model.password = user.password
        model.role = user.role
        model.push_token = user.push_token
        model.last_login = ensure_app_naive_datetime(user.last_login)
        if user.created_at is not None:
            model.created_at = ensure_app_naive_datetime(user.created_at)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
            role=model.role,
            push_token=model.push_token,
            last_login=ensure_app_timezone(model.last_login),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["UserRepository"]
