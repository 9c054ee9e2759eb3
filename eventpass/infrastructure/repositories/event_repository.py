"""Persistence layer for events."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from eventpass.domain.entities import Event
from eventpass.infrastructure.models import EventModel
from eventpass.utils import ensure_app_naive_datetime, ensure_app_timezone


class EventRepository:
    """Provide read and create helpers for :class:`Event` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, event_id: int) -> Event | None:
        model = self.session.get(EventModel, event_id)
        return self._to_entity(model) if model else None

    def get_by_public_link(self, public_link: str) -> Event | None:
        model = (
            self.session.query(EventModel)
            .filter(EventModel.public_link == public_link)
            .first()
        )
        return self._to_entity(model) if model else None

    def list_by_organizer(self, organizer_id: int) -> Sequence[Event]:
        query = (
            self.session.query(EventModel)
            .filter(EventModel.organizer_id == organizer_id)
            .order_by(EventModel.created_at.desc(), EventModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, event: Event) -> Event:
        model = EventModel(
            organizer_id=event.organizer_id,
            title=event.title,
            description=event.description,
            location=event.location,
            start_date=ensure_app_naive_datetime(event.start_date),
            end_date=ensure_app_naive_datetime(event.end_date),
            requires_approval=event.requires_approval,
            check_in_enabled=event.check_in_enabled,
            public_link=event.public_link,
        )
        if event.created_at is not None:
            model.created_at = ensure_app_naive_datetime(event.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: EventModel) -> Event:
        return Event(
            id=model.id,
            organizer_id=model.organizer_id,
            title=model.title,
            description=model.description,
            location=model.location,
            start_date=ensure_app_timezone(model.start_date),
            end_date=ensure_app_timezone(model.end_date),
            requires_approval=bool(model.requires_approval),
            check_in_enabled=bool(model.check_in_enabled),
            public_link=model.public_link,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["EventRepository"]
