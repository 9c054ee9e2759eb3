"""Authentication related schemas."""

from pydantic import BaseModel, EmailStr, Field


class Token(BaseModel):
    access_token: str
    token_type: str
    role: str


class SignupRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: str = Field(default="participant", description="participant, organizer o verifier")


class PushTokenUpdate(BaseModel):
    push_token: str | None = Field(
        default=None, description="Token del dispositivo; vacío o nulo lo elimina"
    )
