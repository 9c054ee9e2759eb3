"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"

EXPO_PUSH_URL = "https://exp.host/--/api/v2/push/send"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone name (or UTC+HH:MM offset) used for timestamps",
    )
    public_base_url: str | None = Field(
        default=None,
        description="Base URL used to build absolute ticket links",
    )
    push_enabled: bool = Field(
        default=True,
        description="Whether notifications are forwarded to the external push gateway",
    )
    push_gateway_url: str = Field(
        default=EXPO_PUSH_URL,
        description="Endpoint of the push gateway accepting batched messages",
    )
    push_gateway_timeout_seconds: float = Field(
        default=10.0,
        description="Upper bound for a single push gateway request",
        gt=0,
    )
    fanout_chunk_size: int = Field(
        default=100,
        description="Number of recipients processed together by the fan-out engine",
        gt=0,
    )

    @model_validator(mode="after")
    def _validate_push_gateway(self) -> "Settings":
        if self.push_enabled and not self.push_gateway_url.strip():
            raise ValueError("PUSH_GATEWAY_URL must be provided when PUSH_ENABLED is true")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
