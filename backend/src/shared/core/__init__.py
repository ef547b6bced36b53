"""
Core Module

Cross-cutting pieces shared by every layer:
- Structured logging (structlog)
- Error kinds and the exception hierarchy

Usage:
======
    from src.shared.core.logging import logger
    from src.shared.core.exceptions import ConflictError, NotFoundError
"""

from src.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from src.shared.core.exceptions import (
    ErrorKind,
    STATUS_BY_KIND,
    SpeadwearException,
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    UserNotFoundError,
    ItemNotFoundError,
    CoordinateNotFoundError,
    CommentNotFoundError,
    NotificationNotFoundError,
    ValidationError,
    ConflictError,
    InvalidOperationError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "ErrorKind",
    "STATUS_BY_KIND",
    "SpeadwearException",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "UserNotFoundError",
    "ItemNotFoundError",
    "CoordinateNotFoundError",
    "CommentNotFoundError",
    "NotificationNotFoundError",
    "ValidationError",
    "ConflictError",
    "InvalidOperationError",
]
