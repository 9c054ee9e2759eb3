"""SQLAlchemy model for registrations."""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)

from eventpass.infrastructure.database import Base
from eventpass.utils import now_in_app_naive_datetime


class RegistrationModel(Base):
    """Database representation of an attendee registration."""

    __tablename__ = "registration"
    __table_args__ = (
        UniqueConstraint("event_id", "email", name="uq_registration_event_email"),
    )

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("event.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=True, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(254), nullable=False, index=True)
    phone = Column(String(40), nullable=True)
    form_data = Column(JSON, nullable=False, default=dict)
    status = Column(String(20), nullable=False, default="pending", index=True)
    qr_code = Column(String(64), nullable=False, unique=True, index=True)
    ticket_link = Column(String(64), nullable=False, unique=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["RegistrationModel"]
