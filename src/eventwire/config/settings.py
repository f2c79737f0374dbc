"""Library settings using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide defaults loaded from ``EVENTWIRE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="EVENTWIRE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Registry
    default_max_listeners: int = Field(default=10, ge=0)

    # Dispatch
    capture_rejections: bool = False

    # Wiring
    max_wiring_depth: int = Field(default=32, ge=1)

    # Logging
    log_level: str = "WARNING"
    log_json: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
