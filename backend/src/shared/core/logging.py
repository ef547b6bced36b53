"""
Logging Configuration

Structured logging for Speadwear, built on structlog.

Log Output:
===========
Development:
    2026-03-02 10:30:00 [info     ] User followed      follower_id=3 followed_id=7

Production (JSON):
    {"timestamp": "...", "level": "info", "event": "User followed", "follower_id": 3, ...}

Request Context:
================
RequestLoggingMiddleware binds request_id / method / path with log_context()
at the start of every request and clears them at the end, so every event
emitted by handlers and services carries them.

Usage:
======
    from src.shared.core.logging import logger, get_logger, log_context

    logger.info("Coordinate liked", user_id=user_id, coordinate_id=coordinate_id)

    storage_logger = get_logger("storage")
    storage_logger.debug("Picture written", path=path)
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

from src.config.settings import settings


def setup_logging() -> None:
    """
    Configure structlog and the stdlib root logger.

    Development gets a colored console renderer, every other environment
    gets one JSON object per line. Called once on module import.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.is_development:
        processors: list[Processor] = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a named structured logger.

    Args:
        name: Logger name shown in the `logger` field

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """
    Bind key/value pairs to every log call made in the current context.

    Args:
        **kwargs: Context fields, e.g. request_id="..." or user_id=3
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    """Drop all bound context fields (end of request)."""
    structlog.contextvars.clear_contextvars()


setup_logging()

logger = get_logger("speadwear")
