"""Pydantic Settings for the Asana integration."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://app.asana.com/api/1.0"
DEFAULT_HANDSHAKE_TIMEOUT = 10.0  # seconds


class Settings(BaseSettings):
    """Application settings with support for env vars and .env files."""

    model_config = SettingsConfigDict(
        env_prefix="ASANA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(default=False, alias="DEBUG_MODE")

    # Credentials supplied by the host credential store
    access_token: str = ""
    refresh_token: str = ""
    webhook_secret: str = ""
    use_refresh_token_as_secret: bool = False

    # API surface
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=30.0, description="HTTP timeout in seconds")
    handshake_timeout: float = Field(
        default=DEFAULT_HANDSHAKE_TIMEOUT, description="Seconds to wait for the webhook handshake callback"
    )


# Global settings instance (lazy-loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance (useful for testing)."""
    global _settings
    _settings = None
