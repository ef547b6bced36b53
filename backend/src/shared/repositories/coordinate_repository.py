"""
Coordinate Repository

Database operations for coordinates (outfits).

Loading Items:
==============
Coordinate.items is never lazy loaded (async sessions cannot lazy load).
Methods that return coordinates for API responses use selectinload so the
items are available without further I/O:

    SELECT * FROM coordinates WHERE ...
    SELECT * FROM items WHERE coordinate_id IN (...)
"""

from typing import Any, Optional

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.shared.repositories.base import BaseRepository
from src.shared.models.coordinate import Coordinate


class CoordinateRepository(BaseRepository[Coordinate]):
    """Repository for Coordinate database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Coordinate, session)

    def _with_items(self, query: Select) -> Select:
        return query.options(selectinload(Coordinate.items))

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_with_items(self, coordinate_id: int) -> Optional[Coordinate]:
        """
        Get a coordinate with its items eager-loaded.

        populate_existing makes a coordinate already in the identity map pick
        up item links changed earlier in the same session.
        """
        result = await self.session.execute(
            self._with_items(select(Coordinate).where(Coordinate.id == coordinate_id))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_user_id(
        self,
        user_id: int,
        limit: int,
        offset: int,
    ) -> tuple[list[Coordinate], int]:
        """A user's coordinates, newest first, with total count."""
        query = select(Coordinate).where(Coordinate.user_id == user_id)
        total = await self._count(query)
        coordinates = await self._scalars(
            self._with_items(self.newest_first(query)).offset(offset).limit(limit)
        )
        return coordinates, total

    async def get_recent_by_user(self, user_id: int, limit: int) -> list[Coordinate]:
        """The `limit` most recent coordinates of one user (timeline fan-in)."""
        query = select(Coordinate).where(Coordinate.user_id == user_id)
        return await self._scalars(self._with_items(self.newest_first(query)).limit(limit))

    async def search(
        self,
        *,
        limit: int,
        offset: int,
        user_id: Optional[int] = None,
        season: Optional[int] = None,
        tpo: Optional[int] = None,
        min_rating: Optional[int] = None,
        max_rating: Optional[int] = None,
    ) -> tuple[list[Coordinate], int]:
        """
        Search coordinates by attributes. None filters are ignored.

        Returns:
            (coordinates, total matching)
        """
        query = select(Coordinate)
        if user_id is not None:
            query = query.where(Coordinate.user_id == user_id)
        if season is not None:
            query = query.where(Coordinate.season == season)
        if tpo is not None:
            query = query.where(Coordinate.tpo == tpo)
        if min_rating is not None:
            query = query.where(Coordinate.rating >= min_rating)
        if max_rating is not None:
            query = query.where(Coordinate.rating <= max_rating)

        total = await self._count(query)
        coordinates = await self._scalars(
            self._with_items(self.newest_first(query)).offset(offset).limit(limit)
        )
        return coordinates, total

    # ═══════════════════════════════════════════════════════════════════════════
    # STATISTICS
    # ═══════════════════════════════════════════════════════════════════════════

    async def count_by(self, user_id: int, column: str) -> dict[Any, int]:
        field = getattr(Coordinate, column)
        result = await self.session.execute(
            select(field, func.count(Coordinate.id))
            .where(Coordinate.user_id == user_id)
            .group_by(field)
        )
        return {key: count for key, count in result.all()}

    async def average_rating(self, user_id: int) -> float:
        """Average over rated coordinates only (rating > 0)."""
        result = await self.session.execute(
            select(func.avg(Coordinate.rating)).where(
                Coordinate.user_id == user_id,
                Coordinate.rating > 0,
            )
        )
        value = result.scalar()
        return float(value) if value is not None else 0.0
