"""Persistence layer for organizer broadcast history."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from eventpass.domain.entities import BroadcastRecord
from eventpass.infrastructure.models import BroadcastModel
from eventpass.utils import ensure_app_naive_datetime, ensure_app_timezone


class BroadcastRepository:
    """Append and list :class:`BroadcastRecord` entries."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, record: BroadcastRecord) -> BroadcastRecord:
        model = BroadcastModel(
            event_id=record.event_id,
            organizer_id=record.organizer_id,
            title=record.title,
            message=record.message,
        )
        if record.sent_at is not None:
            model.sent_at = ensure_app_naive_datetime(record.sent_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_for_event(self, event_id: int) -> Sequence[BroadcastRecord]:
        query = (
            self.session.query(BroadcastModel)
            .filter(BroadcastModel.event_id == event_id)
            .order_by(BroadcastModel.sent_at.desc(), BroadcastModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: BroadcastModel) -> BroadcastRecord:
        return BroadcastRecord(
            id=model.id,
            event_id=model.event_id,
            organizer_id=model.organizer_id,
            title=model.title,
            message=model.message,
            sent_at=ensure_app_timezone(model.sent_at),
        )


__all__ = ["BroadcastRepository"]
