"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files and nested configuration.

Example:
    >>> from tryutil.config import get_settings
    >>> settings = get_settings()
    >>> settings.logging.level
    'WARNING'

    # Or with environment variables:
    # TRYUTIL_DEBUG=true
    # TRYUTIL_LOG_LOG_CAPTURES=true
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TRYUTIL_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    log_captures: bool = Field(default=False, description="Log every exception captured into an Err")
    include_traceback: bool = Field(default=False, description="Attach the traceback to capture logs")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        """Accept lowercase level names."""
        return v.upper() if isinstance(v, str) else v


class TryutilSettings(BaseSettings):
    """Root settings for tryutil.

    Loads configuration from environment variables with TRYUTIL_ prefix.
    Supports nested configuration and .env files.

    Example environment variables:
        TRYUTIL_DEBUG=true
        TRYUTIL_LOG_LEVEL=DEBUG
        TRYUTIL_LOG_INCLUDE_TRACEBACK=true
    """

    model_config = SettingsConfigDict(
        env_prefix="TRYUTIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode (traces every capture)")
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @computed_field
    @property
    def trace_captures(self) -> bool:
        """Whether captured exceptions should be logged."""
        return self.debug or self.logging.log_captures


@lru_cache(maxsize=1)
def get_settings() -> TryutilSettings:
    """Get the global settings instance (cached).

    Example:
        >>> get_settings().debug
        False
    """
    return TryutilSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
