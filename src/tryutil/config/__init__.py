"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .log import configure_logging
from .settings import (
    LoggingSettings,
    TryutilSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "LoggingSettings",
    "TryutilSettings",
    "clear_settings_cache",
    "configure_logging",
    "get_settings",
]
