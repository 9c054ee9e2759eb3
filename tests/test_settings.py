"""Tests for environment driven settings."""

import pytest
from pydantic import ValidationError

from eventpass.config import EXPO_PUSH_URL, Settings


def _settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite://",
        "secret_key": "secret",
        "access_token_expire_minutes": 5,
        **overrides,
    }
    return Settings(_env_file=None, **values)


def test_defaults() -> None:
    settings = _settings()

    assert settings.push_gateway_url == EXPO_PUSH_URL
    assert settings.fanout_chunk_size == 100
    assert settings.app_timezone == "UTC"


def test_enabled_push_requires_gateway_url() -> None:
    with pytest.raises(ValidationError):
        _settings(push_enabled=True, push_gateway_url=" ")

    assert _settings(push_enabled=False, push_gateway_url="").push_enabled is False


@pytest.mark.parametrize("chunk_size", [0, -5])
def test_chunk_size_must_be_positive(chunk_size) -> None:
    with pytest.raises(ValidationError):
        _settings(fanout_chunk_size=chunk_size)
