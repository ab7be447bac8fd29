"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files and nested configuration.

Example:
    >>> from railmux.foundation.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.http.timeout)
    30.0
    >>> print(settings.logging.level)
    'INFO'

    # Or with environment variables:
    # RAILMUX_HTTP_TIMEOUT=60
    # RAILMUX_LOG_LEVEL=DEBUG

Workspace tokens are not part of these settings; they keep their
``RAILWAY_*`` names and are read by :func:`railmux.foundation.config.load_workspaces`.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, PositiveFloat, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

RAILWAY_API_URL = "https://backboard.railway.com/graphql/v2"


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RAILMUX_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "text"] = "text"
    include_timestamps: bool = True

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class HttpSettings(BaseSettings):
    """Backend HTTP client configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RAILMUX_HTTP_",
        extra="ignore",
    )

    api_url: str = Field(default=RAILWAY_API_URL, description="Railway GraphQL endpoint")
    timeout: PositiveFloat = Field(default=30.0, description="Per-request timeout in seconds")
    user_agent: str = "railmux/0.1"
    verify_ssl: bool = True


class RailmuxSettings(BaseSettings):
    """Root settings.

    Loads configuration from environment variables with RAILMUX_ prefix.

    Example environment variables:
        RAILMUX_DEBUG=true
        RAILMUX_LOG_LEVEL=DEBUG
        RAILMUX_LOG_FORMAT=json
        RAILMUX_HTTP_TIMEOUT=60
        RAILMUX_TRANSPORT=sse
    """

    model_config = SettingsConfigDict(
        env_prefix="RAILMUX_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")
    server_name: str = "railway"
    transport: Literal["stdio", "sse", "streamable-http"] = "stdio"
    host: str = "127.0.0.1"
    port: int = Field(default=8080, ge=1, le=65535)

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)

    @computed_field
    @property
    def log_level(self) -> str:
        """Effective log level (debug mode forces DEBUG)."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> RailmuxSettings:
    """Get the global settings instance (cached)."""
    return RailmuxSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
