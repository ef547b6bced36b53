"""
Pydantic Schemas

Request validation and response serialization models, grouped by area:

- common: BaseSchema, pagination, message / error / health responses
- user: signup, login, profile and account management
- item: wardrobe items, search filter, statistics
- coordinate: outfits, search filter, statistics, like status
- social: comments, follow / block status, notifications
"""

from src.shared.schemas.common import (
    BaseSchema,
    PaginationParams,
    PaginationMeta,
    PaginatedResponse,
    MessageResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "BaseSchema",
    "PaginationParams",
    "PaginationMeta",
    "PaginatedResponse",
    "MessageResponse",
    "ErrorResponse",
    "HealthResponse",
]
