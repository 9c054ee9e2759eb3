"""SQLAlchemy model for organizer broadcast history."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from eventpass.infrastructure.database import Base
from eventpass.utils import now_in_app_naive_datetime


class BroadcastModel(Base):
    """Database representation of a sent broadcast."""

    __tablename__ = "broadcast"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("event.id"), nullable=False, index=True)
    organizer_id = Column(Integer, ForeignKey("user.id"), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    sent_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["BroadcastModel"]
