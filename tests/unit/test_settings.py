"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from orders_api import config
from orders_api.config import Settings, get_settings


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)  # type: ignore[call-arg]


def test_defaults(monkeypatch: pytest.MonkeyPatch):
    """Test the defaults for listener, store and collector addresses."""
    for name in ("PORT", "HOST", "REDIS_URL", "OTLP_ENDPOINT", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)

    settings = _settings()

    assert settings.port == 9911
    assert settings.host == "0.0.0.0"
    assert str(settings.redis_url).startswith("redis://localhost:6379")
    assert settings.otlp_endpoint == "localhost:4317"
    assert settings.shutdown_grace_seconds == 10.0
    assert settings.is_development is True


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch):
    """Test that environment variables override defaults."""
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("REDIS_URL", "redis://cache:6380/2")
    monkeypatch.setenv("ENVIRONMENT", "production")

    settings = _settings()

    assert settings.port == 8080
    assert str(settings.redis_url).startswith("redis://cache:6380")
    assert settings.is_production is True


@pytest.mark.parametrize("port", [0, 70000])
def test_invalid_port_rejected(port: int):
    """Test that out-of-range ports fail validation."""
    with pytest.raises(ValidationError):
        _settings(port=port)


def test_negative_grace_rejected():
    """Test that a negative drain period fails validation."""
    with pytest.raises(ValidationError):
        _settings(shutdown_grace_seconds=-1)


def test_settings_read_on_first_use(monkeypatch: pytest.MonkeyPatch):
    """Test that importing the module does not snapshot the environment."""
    monkeypatch.setenv("PORT", "8181")
    get_settings.cache_clear()
    try:
        assert not hasattr(config, "settings")
        assert get_settings().port == 8181
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
