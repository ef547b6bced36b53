"""
Pagination dependency.

    GET /items?page=2&per_page=20  →  PaginationParams(page=2, per_page=20)
                                      .offset == 20, .limit == 20
"""

from typing import Annotated

from fastapi import Depends, Query

from src.shared.schemas.common import DEFAULT_PER_PAGE, MAX_PER_PAGE, PaginationParams


async def get_pagination(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    per_page: int = Query(
        DEFAULT_PER_PAGE,
        ge=1,
        le=MAX_PER_PAGE,
        description="Items per page",
    ),
) -> PaginationParams:
    """Pagination parameters dependency."""
    return PaginationParams(page=page, per_page=per_page)


Pagination = Annotated[PaginationParams, Depends(get_pagination)]
