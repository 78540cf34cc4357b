"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import RedisDsn, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from orders_api.core.constants import DEFAULT_SERVICE_PORT, MAX_PORT


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "orders-api"
    debug: bool = False
    environment: str = "development"  # development, staging, production

    # HTTP listener
    host: str = "0.0.0.0"
    port: int = DEFAULT_SERVICE_PORT
    shutdown_grace_seconds: float = 10.0

    # Redis
    redis_url: RedisDsn = RedisDsn("redis://localhost:6379")
    redis_socket_timeout: float | None = None

    # Observability
    otlp_endpoint: str | None = "localhost:4317"
    otlp_insecure: bool = True
    instrument_http: bool = True
    log_level: str = "INFO"

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Reject ports outside the TCP range."""
        if not 0 < v <= MAX_PORT:
            raise ValueError(f"PORT must be between 1 and {MAX_PORT}, got {v}")
        return v

    @field_validator("shutdown_grace_seconds")
    @classmethod
    def validate_grace(cls, v: float) -> float:
        if v < 0:
            raise ValueError("SHUTDOWN_GRACE_SECONDS must not be negative")
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

