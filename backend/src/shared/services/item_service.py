"""
Item Service

Business logic for wardrobe items.

Ownership:
==========
Only the owner may update, delete or upload a picture for an item. Reads are
public.

Usage:
======
    service = ItemService(db)
    item = await service.create_item(user_id, ItemCreate(super_item="tops", season=1, tpo=2, color=1))
    stats = await service.get_user_item_statistics(user_id)
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.adapters.storage import LocalImageStorage
from src.shared.core.exceptions import ForbiddenError, ItemNotFoundError
from src.shared.core.logging import logger
from src.shared.models.item import Item
from src.shared.repositories.item_repository import ItemRepository
from src.shared.schemas.item import ItemCreate, ItemFilter, ItemStatistics, ItemUpdate


@dataclass
class PaginatedItems:
    """Page of items plus the total number of matches."""

    items: list[Item]
    total: int


class ItemService:
    """Service for item business logic."""

    def __init__(
        self,
        session: AsyncSession,
        storage: Optional[LocalImageStorage] = None,
    ) -> None:
        self.session = session
        self.repo = ItemRepository(session)
        self.storage = storage or LocalImageStorage()

    # ═══════════════════════════════════════════════════════════════════════════
    # CRUD
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_item(self, user_id: int, data: ItemCreate) -> Item:
        item = await self.repo.create(user_id=user_id, **data.model_dump())
        logger.info("Item created", item_id=item.id, user_id=user_id, super_item=item.super_item)
        return item

    async def get_item(self, item_id: int) -> Item:
        item = await self.repo.get(item_id)
        if not item:
            raise ItemNotFoundError(item_id)
        return item

    async def update_item(self, user_id: int, item_id: int, data: ItemUpdate) -> Item:
        """
        Apply the fields present in `data`.

        Raises:
            ItemNotFoundError: No such item
            ForbiddenError: Caller is not the owner
        """
        item = await self._owned_item(user_id, item_id)
        values = data.model_dump(exclude_unset=True, exclude_none=True)
        item = await self.repo.apply(item, values)
        logger.info("Item updated", item_id=item_id, fields=sorted(values))
        return item

    async def delete_item(self, user_id: int, item_id: int) -> None:
        item = await self._owned_item(user_id, item_id)
        picture = item.picture
        await self.repo.delete_instance(item)
        self.storage.delete_after_commit(self.session, picture)
        logger.info("Item deleted", item_id=item_id, user_id=user_id)

    async def upload_item_picture(self, user_id: int, item_id: int, upload: UploadFile) -> Item:
        item = await self._owned_item(user_id, item_id)
        previous = item.picture
        url = await self.storage.save(upload, "items")
        item = await self.repo.apply(item, {"picture": url})
        self.storage.delete_after_commit(self.session, previous)
        return item

    # ═══════════════════════════════════════════════════════════════════════════
    # LISTING & SEARCH
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_user_items(self, user_id: int, limit: int, offset: int) -> PaginatedItems:
        items, total = await self.repo.get_by_user_id(user_id, limit, offset)
        return PaginatedItems(items=items, total=total)

    async def search_items(self, filters: ItemFilter) -> PaginatedItems:
        items, total = await self.repo.search(
            limit=filters.limit,
            offset=filters.offset,
            user_id=filters.user_id,
            season=filters.season,
            tpo=filters.tpo,
            color=filters.color,
            super_item=filters.super_item,
            min_rating=filters.min_rating,
            max_rating=filters.max_rating,
        )
        return PaginatedItems(items=items, total=total)

    # ═══════════════════════════════════════════════════════════════════════════
    # BATCH & STATISTICS
    # ═══════════════════════════════════════════════════════════════════════════

    async def delete_user_items(self, user_id: int, item_ids: list[int]) -> int:
        """
        Delete several of the caller's items.

        Ids that do not exist are skipped. If any existing item belongs to
        someone else nothing is deleted.

        Returns:
            Number of items deleted
        """
        items = await self.repo.get_by_ids(list(dict.fromkeys(item_ids)))
        for item in items:
            if item.user_id != user_id:
                raise ForbiddenError(
                    "you can only delete your own items",
                    details={"item_id": item.id},
                )

        pictures = [item.picture for item in items]
        for item in items:
            await self.repo.delete_instance(item)
        for picture in pictures:
            self.storage.delete_after_commit(self.session, picture)

        logger.info("Items deleted", user_id=user_id, deleted=len(items), requested=len(item_ids))
        return len(items)

    async def get_user_item_statistics(self, user_id: int) -> ItemStatistics:
        category_count = await self.repo.count_by(user_id, "super_item")
        return ItemStatistics(
            total_items=sum(category_count.values()),
            category_count=category_count,
            season_count=await self.repo.count_by(user_id, "season"),
            tpo_count=await self.repo.count_by(user_id, "tpo"),
            color_count=await self.repo.count_by(user_id, "color"),
            average_rating=await self.repo.average_rating(user_id),
        )

    async def _owned_item(self, user_id: int, item_id: int) -> Item:
        item = await self.get_item(item_id)
        if item.user_id != user_id:
            raise ForbiddenError("you can only modify your own items")
        return item
