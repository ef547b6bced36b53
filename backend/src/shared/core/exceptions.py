"""
Custom Exceptions

Application-specific exceptions, each tagged with an explicit ErrorKind.
The HTTP status of an error is derived from its kind through STATUS_BY_KIND,
so the API layer never has to inspect message text.

Exception Hierarchy:
====================
    SpeadwearException (base, kind=UNEXPECTED → 500)
       │
       ├── AuthenticationError (401)     ← Bad credentials, token expired
       ├── ForbiddenError (403)          ← Not the owner, blocked by the target
       ├── NotFoundError (404)           ← Referenced entity does not exist
       │      ├── UserNotFoundError
       │      ├── ItemNotFoundError
       │      ├── CoordinateNotFoundError
       │      ├── CommentNotFoundError
       │      └── NotificationNotFoundError
       ├── ConflictError (400)           ← Already following / blocked / liked
       ├── InvalidOperationError (400)   ← Self-follow, self-block
       └── ValidationError (400)         ← Invalid input data

Usage:
======
    from src.shared.core.exceptions import ConflictError, NotFoundError

    raise NotFoundError("User", user_id)
    # → {"error": {"code": "NOT_FOUND", "message": "User with id '42' not found"}}

    raise ConflictError("already following")
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Closed set of error categories surfaced to clients."""

    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INVALID_OPERATION = "INVALID_OPERATION"
    FORBIDDEN = "FORBIDDEN"
    VALIDATION = "VALIDATION_ERROR"
    AUTHENTICATION = "AUTHENTICATION_ERROR"
    UNEXPECTED = "INTERNAL_ERROR"


# Every ErrorKind must appear here; tests assert the mapping is total.
STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 400,
    ErrorKind.INVALID_OPERATION: 400,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.UNEXPECTED: 500,
}


class SpeadwearException(Exception):
    """
    Base exception for all Speadwear application errors.

    Attributes:
        message: Human-readable error message
        kind: ErrorKind category, drives the HTTP status code
        details: Additional error context

    Example:
        raise SpeadwearException("Something went wrong", details={"step": "upload"})
    """

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(
        self,
        message: str = "Unexpected error",
        details: Optional[dict[str, Any]] = None,
        kind: Optional[ErrorKind] = None,
    ) -> None:
        self.message = message
        if kind is not None:
            self.kind = kind
        self.details = details or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    @property
    def error_code(self) -> str:
        return self.kind.value

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dictionary with error details for JSON response
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION & AUTHORIZATION ERRORS (401, 403)
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(SpeadwearException):
    """
    Authentication failed error (401 Unauthorized).

    Raised when:
    - Missing or invalid credentials
    - Token expired or malformed
    - Account not activated
    """

    kind = ErrorKind.AUTHENTICATION

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)


class ForbiddenError(SpeadwearException):
    """
    Forbidden error (403).

    Raised when the caller is authenticated but the action is not allowed:
    editing someone else's item, commenting on a coordinate whose owner
    blocked the caller, and so on.
    """

    kind = ErrorKind.FORBIDDEN

    def __init__(
        self,
        message: str = "Access denied",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(SpeadwearException):
    """
    Resource not found error (404 Not Found).

    Two call styles are accepted:

        raise NotFoundError("User", 42)     # "User with id '42' not found"
        raise NotFoundError("not following") # used verbatim
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        resource: str,
        resource_id: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = resource
        if resource_id is not None:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(message=message, details=details)


class UserNotFoundError(NotFoundError):
    """User not found error."""

    def __init__(self, user_id: Any) -> None:
        super().__init__(resource="User", resource_id=user_id)


class ItemNotFoundError(NotFoundError):
    """Item not found error."""

    def __init__(self, item_id: Any) -> None:
        super().__init__(resource="Item", resource_id=item_id)


class CoordinateNotFoundError(NotFoundError):
    """Coordinate not found error."""

    def __init__(self, coordinate_id: Any) -> None:
        super().__init__(resource="Coordinate", resource_id=coordinate_id)


class CommentNotFoundError(NotFoundError):
    """Comment not found error."""

    def __init__(self, comment_id: Any) -> None:
        super().__init__(resource="Comment", resource_id=comment_id)


class NotificationNotFoundError(NotFoundError):
    """Notification not found error."""

    def __init__(self, notification_id: Any) -> None:
        super().__init__(resource="Notification", resource_id=notification_id)


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION, CONFLICT & INVALID OPERATION ERRORS (400)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(SpeadwearException):
    """
    Validation error (400 Bad Request).

    Raised when input data fails validation that pydantic cannot express,
    e.g. a wrong current password or an oversized upload.
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)


class ConflictError(SpeadwearException):
    """
    Duplicate relationship or resource (400).

    Example:
        raise ConflictError("already liked")
    """

    kind = ErrorKind.CONFLICT

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)


class InvalidOperationError(SpeadwearException):
    """Self-directed or otherwise nonsensical operation (400)."""

    kind = ErrorKind.INVALID_OPERATION

    def __init__(
        self,
        message: str = "Invalid operation",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)
