"""Persistence layer for registrations."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from eventpass.domain.entities import Registration, RegistrationStatus
from eventpass.domain.identity import normalize_email
from eventpass.infrastructure.models import RegistrationModel
from eventpass.utils import ensure_app_timezone


class RegistrationRepository:
    """Provide CRUD and status helpers for :class:`Registration` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, registration_id: int) -> Registration | None:
        model = self.session.get(RegistrationModel, registration_id)
        return self._to_entity(model) if model else None

    def get_fresh(self, registration_id: int) -> Registration | None:
        """Return the registration re-read from the database, bypassing the identity map."""

        model = (
            self.session.query(RegistrationModel)
            .filter(RegistrationModel.id == registration_id)
            .populate_existing()
            .first()
        )
        return self._to_entity(model) if model else None

    def get_by_qr_code(self, qr_code: str) -> Registration | None:
        model = (
            self.session.query(RegistrationModel)
            .filter(RegistrationModel.qr_code == qr_code)
            .first()
        )
        return self._to_entity(model) if model else None

    def get_by_event_and_email(self, event_id: int, email: str) -> Registration | None:
        model = (
            self.session.query(RegistrationModel)
            .filter(RegistrationModel.event_id == event_id)
            .filter(RegistrationModel.email == normalize_email(email))
            .first()
        )
        return self._to_entity(model) if model else None

    def get_by_event_and_user(self, event_id: int, user_id: int) -> Registration | None:
        model = (
            self.session.query(RegistrationModel)
            .filter(RegistrationModel.event_id == event_id)
            .filter(RegistrationModel.user_id == user_id)
            .order_by(RegistrationModel.id.asc())
            .first()
        )
        return self._to_entity(model) if model else None

    def list_for_event(
        self,
        event_id: int,
        *,
        status: RegistrationStatus | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> Sequence[Registration]:
        query = self.session.query(RegistrationModel).filter(
            RegistrationModel.event_id == event_id
        )
        if status is not None:
            query = query.filter(RegistrationModel.status == status.value)
        query = query.order_by(
            RegistrationModel.created_at.desc(), RegistrationModel.id.desc()
        ).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_for_user(self, user_id: int) -> Sequence[Registration]:
        query = (
            self.session.query(RegistrationModel)
            .filter(RegistrationModel.user_id == user_id)
            .order_by(RegistrationModel.created_at.desc(), RegistrationModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_for_email(self, email: str) -> Sequence[Registration]:
        query = (
            self.session.query(RegistrationModel)
            .filter(RegistrationModel.email == normalize_email(email))
            .order_by(RegistrationModel.created_at.desc(), RegistrationModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def count_by_status(self, event_id: int) -> dict[str, int]:
        query = (
            self.session.query(RegistrationModel.status, func.count(RegistrationModel.id))
            .filter(RegistrationModel.event_id == event_id)
            .group_by(RegistrationModel.status)
        )
        return {status: int(total) for status, total in query.all()}

    def create(self, registration: Registration) -> Registration:
        model = RegistrationModel(
            event_id=registration.event_id,
            user_id=registration.user_id,
            name=registration.name,
            email=normalize_email(registration.email),
            phone=registration.phone,
            form_data=registration.form_data or {},
            status=RegistrationStatus(registration.status).value,
            qr_code=registration.qr_code,
            ticket_link=registration.ticket_link,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def compare_and_set_status(
        self,
        registration_id: int,
        *,
        expected: RegistrationStatus,
        new: RegistrationStatus,
        commit: bool = True,
    ) -> bool:
        """Move the row to ``new`` only if it is still in ``expected``.

        Returns ``False`` when another writer changed the status first.
        """

        result = self.session.execute(
            update(RegistrationModel)
            .where(RegistrationModel.id == registration_id)
            .where(RegistrationModel.status == expected.value)
            .values(status=new.value)
            .execution_options(synchronize_session=False)
        )
        if commit:
            self.session.commit()
        return result.rowcount == 1

    def link_guest_registrations(self, email: str, user_id: int) -> int:
        """Assign every ownerless registration for ``email`` to ``user_id``."""

        normalized = normalize_email(email)
        if not normalized:
            return 0
        result = self.session.execute(
            update(RegistrationModel)
            .where(RegistrationModel.user_id.is_(None))
            .where(RegistrationModel.email == normalized)
            .values(user_id=user_id)
            .execution_options(synchronize_session=False)
        )
        self.session.commit()
        return result.rowcount or 0

    @staticmethod
    def _to_entity(model: RegistrationModel) -> Registration:
        return Registration(
            id=model.id,
            event_id=model.event_id,
            user_id=model.user_id,
            name=model.name,
            email=model.email,
            phone=model.phone,
            status=RegistrationStatus(model.status),
            qr_code=model.qr_code,
            ticket_link=model.ticket_link,
            form_data=dict(model.form_data or {}),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["RegistrationRepository"]
