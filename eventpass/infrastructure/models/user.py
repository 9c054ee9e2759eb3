"""SQLAlchemy model for the user table."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from eventpass.infrastructure.database import Base
from eventpass.utils import now_in_app_naive_datetime


class UserModel(Base):
    """Database representation of an account."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(254), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="participant")
    push_token = Column(Text, nullable=True)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["UserModel"]
