"""Event schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    location: str | None = Field(default=None, max_length=255)
    start_date: datetime
    end_date: datetime | None = None
    requires_approval: bool = False
    check_in_enabled: bool = True


class EventRead(BaseModel):
    id: int
    organizer_id: int
    title: str
    description: str | None
    location: str | None
    start_date: datetime
    end_date: datetime | None
    requires_approval: bool
    check_in_enabled: bool
    public_link: str
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class EventStatsRead(BaseModel):
    total: int
    pending: int
    approved: int
    rejected: int
    checked_in: int
    checked_out: int

    model_config = ConfigDict(from_attributes=True)
