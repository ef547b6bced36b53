"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Authentication: get_current_user(), CurrentUser, OptionalUser
- Pagination: get_pagination(), Pagination
- Services: get_*_service() functions

Usage:
======
    from src.api.dependencies import CurrentUser, Pagination

    @router.get("/items")
    async def list_items(current_user: CurrentUser, pagination: Pagination, ...):
        ...
"""

from src.api.dependencies.database import (
    get_db,
    DbSession,
)
from src.api.dependencies.auth import (
    get_current_user,
    get_current_user_token,
    get_optional_user,
    CurrentUser,
    OptionalUser,
)
from src.api.dependencies.pagination import (
    get_pagination,
    Pagination,
)

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # Authentication
    "get_current_user",
    "get_current_user_token",
    "get_optional_user",
    "CurrentUser",
    "OptionalUser",
    # Pagination
    "get_pagination",
    "Pagination",
]
