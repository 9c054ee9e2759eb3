"""Persistence layer for the check-in audit trail."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from eventpass.domain.entities import CheckInRecord, CheckInType
from eventpass.infrastructure.models import CheckInModel
from eventpass.utils import ensure_app_naive_datetime, ensure_app_timezone


class CheckInRepository:
    """Append and read :class:`CheckInRecord` entries. Entries are never updated."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, record: CheckInRecord, *, commit: bool = True) -> CheckInRecord:
        model = CheckInModel(
            registration_id=record.registration_id,
            verifier_id=record.verifier_id,
            type=CheckInType(record.type).value,
        )
        if record.timestamp is not None:
            model.timestamp = ensure_app_naive_datetime(record.timestamp)
        self.session.add(model)
        if commit:
            self.session.commit()
            self.session.refresh(model)
        else:
            self.session.flush()
        return self._to_entity(model)

    def list_for_registration(self, registration_id: int) -> Sequence[CheckInRecord]:
        query = (
            self.session.query(CheckInModel)
            .filter(CheckInModel.registration_id == registration_id)
            .order_by(CheckInModel.timestamp.desc(), CheckInModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: CheckInModel) -> CheckInRecord:
        return CheckInRecord(
            id=model.id,
            registration_id=model.registration_id,
            verifier_id=model.verifier_id,
            type=CheckInType(model.type),
            timestamp=ensure_app_timezone(model.timestamp),
        )


__all__ = ["CheckInRepository"]
