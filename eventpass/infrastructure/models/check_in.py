"""SQLAlchemy model for check-in audit entries."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from eventpass.infrastructure.database import Base
from eventpass.utils import now_in_app_naive_datetime


class CheckInModel(Base):
    """Append-only record of a check-in or check-out."""

    __tablename__ = "check_in"

    id = Column(Integer, primary_key=True, index=True)
    registration_id = Column(
        Integer, ForeignKey("registration.id"), nullable=False, index=True
    )
    verifier_id = Column(Integer, ForeignKey("user.id"), nullable=True)
    type = Column(String(20), nullable=False)
    timestamp = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["CheckInModel"]
