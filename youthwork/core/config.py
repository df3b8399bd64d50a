"""Service configuration using pydantic-settings.

Only the service shell is configurable here. Rule behaviour comes from the
packaged ruleset and never from the environment.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application environment
    env: Literal["dev", "test", "staging", "prod"] = "dev"

    # Logging
    log_level: str = "INFO"

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_storage_url: str | None = None  # Redis URL for multi-worker deployments
    validate_rate_limit_requests: int = 60
    validate_rate_limit_window_seconds: int = 60

    # CORS (dev only)
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:3001"]

    @property
    def is_dev(self) -> bool:
        """Check if running in development mode."""
        return self.env == "dev"

    @property
    def is_prod(self) -> bool:
        """Check if running in production mode."""
        return self.env == "prod"

    @property
    def is_test(self) -> bool:
        """Check if running in test mode."""
        return self.env == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
