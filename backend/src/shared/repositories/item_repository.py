"""
Item Repository

Database operations for wardrobe items.

Common Operations:
==================
- get_by_user_id()          → A user's items, newest first, with total
- search()                  → Attribute / rating filtered search
- get_by_coordinate_id()    → Items currently linked to a coordinate
- link_to_coordinate()      → Bulk set coordinate_id
- unlink_from_coordinate()  → Bulk clear coordinate_id
- count_by() / average_rating() → Statistics aggregates
"""

from typing import Any, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.repositories.base import BaseRepository
from src.shared.models.item import Item


class ItemRepository(BaseRepository[Item]):
    """Repository for Item database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Item, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # LISTING & SEARCH
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_by_user_id(
        self,
        user_id: int,
        limit: int,
        offset: int,
    ) -> tuple[list[Item], int]:
        """
        Get a user's items, newest first.

        Returns:
            (items, total count for the user)
        """
        query = select(Item).where(Item.user_id == user_id)
        total = await self._count(query)
        items = await self._scalars(self.newest_first(query).offset(offset).limit(limit))
        return items, total

    async def search(
        self,
        *,
        limit: int,
        offset: int,
        user_id: Optional[int] = None,
        season: Optional[int] = None,
        tpo: Optional[int] = None,
        color: Optional[int] = None,
        super_item: Optional[str] = None,
        min_rating: Optional[int] = None,
        max_rating: Optional[int] = None,
    ) -> tuple[list[Item], int]:
        """
        Search items by attributes. Every filter left as None is ignored.

        Example:
            items, total = await repo.search(season=2, color=1, min_rating=3, limit=20, offset=0)

        SQL Generated:
            SELECT * FROM items
            WHERE season = 2 AND color = 1 AND rating >= 3
            ORDER BY created_at DESC, id DESC
            LIMIT 20 OFFSET 0
        """
        query = select(Item)
        if user_id is not None:
            query = query.where(Item.user_id == user_id)
        if season is not None:
            query = query.where(Item.season == season)
        if tpo is not None:
            query = query.where(Item.tpo == tpo)
        if color is not None:
            query = query.where(Item.color == color)
        if super_item:
            query = query.where(Item.super_item == super_item)
        if min_rating is not None:
            query = query.where(Item.rating >= min_rating)
        if max_rating is not None:
            query = query.where(Item.rating <= max_rating)

        total = await self._count(query)
        items = await self._scalars(self.newest_first(query).offset(offset).limit(limit))
        return items, total

    # ═══════════════════════════════════════════════════════════════════════════
    # COORDINATE LINKS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_by_coordinate_id(self, coordinate_id: int) -> list[Item]:
        return await self._scalars(
            select(Item).where(Item.coordinate_id == coordinate_id).order_by(Item.id)
        )

    async def link_to_coordinate(self, item_ids: list[int], coordinate_id: int) -> None:
        """
        Point every item in `item_ids` at `coordinate_id`.

        SQL Generated:
            UPDATE items SET coordinate_id = :cid WHERE id IN (...)
        """
        if not item_ids:
            return
        await self.session.execute(
            update(Item)
            .where(Item.id.in_(item_ids))
            .values(coordinate_id=coordinate_id)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.flush()

    async def unlink_from_coordinate(self, coordinate_id: int) -> None:
        """Clear coordinate_id on every item currently linked to `coordinate_id`."""
        await self.session.execute(
            update(Item)
            .where(Item.coordinate_id == coordinate_id)
            .values(coordinate_id=None)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.flush()

    # ═══════════════════════════════════════════════════════════════════════════
    # STATISTICS
    # ═══════════════════════════════════════════════════════════════════════════

    async def count_by(self, user_id: int, column: str) -> dict[Any, int]:
        """
        Group a user's items by one column and count each group.

        Example:
            await repo.count_by(3, "season")  # {1: 4, 2: 7}
        """
        field = getattr(Item, column)
        result = await self.session.execute(
            select(field, func.count(Item.id))
            .where(Item.user_id == user_id)
            .group_by(field)
        )
        return {key: count for key, count in result.all()}

    async def average_rating(self, user_id: int) -> float:
        """Average over rated items only (rating > 0)."""
        result = await self.session.execute(
            select(func.avg(Item.rating)).where(Item.user_id == user_id, Item.rating > 0)
        )
        value = result.scalar()
        return float(value) if value is not None else 0.0
