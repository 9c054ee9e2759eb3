"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr


class UserRead(BaseModel):
    id: int
    name: str
    email: EmailStr
    role: str
    has_push_token: bool = False
    last_login: datetime | None
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)
