"""Logger setup for the tryutil package."""

from __future__ import annotations

import logging

from .settings import TryutilSettings, get_settings

logger = logging.getLogger("tryutil")


def configure_logging(settings: TryutilSettings | None = None) -> logging.Logger:
    """Apply the configured level to the ``tryutil`` logger and return it.

    Only the package logger is touched; handlers and the root logger are left
    to the application. In debug mode the level is forced to DEBUG so that
    capture traces are emitted.
    """
    settings = settings or get_settings()
    logger.setLevel(logging.DEBUG if settings.debug else settings.logging.level)
    return logger
