"""SQLAlchemy model for events."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import expression

from eventpass.infrastructure.database import Base
from eventpass.utils import now_in_app_naive_datetime


class EventModel(Base):
    """Database representation of an event."""

    __tablename__ = "event"

    id = Column(Integer, primary_key=True, index=True)
    organizer_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=True)
    requires_approval = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    check_in_enabled = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    public_link = Column(String(32), nullable=False, unique=True, index=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["EventModel"]
