"""Registration, ticket and check-in schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, computed_field

from eventpass.config import get_settings
from eventpass.domain.entities import CheckInType, RegistrationAction, RegistrationStatus


class RegistrationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=30)
    form_data: dict[str, Any] = Field(default_factory=dict)


class RegistrationRead(BaseModel):
    id: int
    event_id: int
    user_id: int | None
    name: str
    email: str
    phone: str | None
    status: RegistrationStatus
    qr_code: str
    ticket_link: str
    form_data: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def ticket_url(self) -> str | None:
        """Absolute link to the ticket when ``PUBLIC_BASE_URL`` is configured."""

        base_url = get_settings().public_base_url
        if not base_url:
            return None
        return f"{base_url.rstrip('/')}/tickets/{self.ticket_link}"


class RegistrationLookup(BaseModel):
    registration: RegistrationRead | None = None


class RegistrationStatusUpdate(BaseModel):
    action: RegistrationAction


class BulkStatusUpdate(BaseModel):
    registration_ids: list[int] = Field(
        ..., min_length=1, description="Cada identificador cuenta en el total, aunque se repita"
    )
    status: RegistrationStatus = Field(..., description="approved o rejected")


class BulkStatusUpdateResult(BaseModel):
    updated: int
    total: int


class ScanRequest(BaseModel):
    qr_code: str = Field(..., min_length=1)


class ScanResult(BaseModel):
    registration: RegistrationRead
    event_title: str
    already_checked_in: bool


class CheckInRequest(BaseModel):
    registration_id: int = Field(..., ge=1)


class CheckInRead(BaseModel):
    id: int
    registration_id: int
    verifier_id: int | None
    type: CheckInType
    timestamp: datetime | None

    model_config = ConfigDict(from_attributes=True)
