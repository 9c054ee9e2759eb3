"""Schemas for organizer broadcasts."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BroadcastCreate(BaseModel):
    title: str | None = Field(default=None, max_length=200)
    message: str = Field(..., min_length=1)


class BroadcastAccepted(BaseModel):
    recipient_count: int


class BroadcastRead(BaseModel):
    id: int
    event_id: int
    organizer_id: int
    title: str
    message: str
    sent_at: datetime | None

    model_config = ConfigDict(from_attributes=True)
