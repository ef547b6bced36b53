"""
API Handlers

Route handlers for the Speadwear API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer, and service errors
reach the client through the global exception handlers.
"""

from src.api.handlers import (
    auth_handler,
    block_handler,
    comment_handler,
    coordinate_handler,
    follow_handler,
    health_handler,
    item_handler,
    notification_handler,
    user_handler,
)

__all__ = [
    "auth_handler",
    "block_handler",
    "comment_handler",
    "coordinate_handler",
    "follow_handler",
    "health_handler",
    "item_handler",
    "notification_handler",
    "user_handler",
]
