"""Structured logging setup and request tracking middleware."""

import logging

import structlog

from user_management.config import Settings
from user_management.core.logging.middleware import (
    RequestIdMiddleware,
    RequestLoggingMiddleware,
)


def configure_logging(settings: Settings) -> None:
    """Configure structlog for the application.

    Development gets human-friendly console output; every other
    environment emits one JSON object per event.

    Args:
        settings: Application settings providing environment and log level
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            (
                structlog.dev.ConsoleRenderer()
                if settings.is_development
                else structlog.processors.JSONRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


__all__ = [
    "RequestIdMiddleware",
    "RequestLoggingMiddleware",
    "configure_logging",
]
