"""
Coordinate Service

Business logic for coordinates (outfits), likes and the follow timeline.

Coordinate / Item Consistency:
==============================
An item's coordinate_id is either null or a coordinate that lists that item.
Coordinate writes and the item re-linking they imply run in one SAVEPOINT:

    create:  INSERT coordinate → UPDATE items SET coordinate_id = new id
    update:  UPDATE coordinate → (item_ids given) clear links → set new links
    delete:  clear links → DELETE coordinate

Either every statement of the block is applied or none is.

Item ownership is checked before the block opens: every referenced item must
exist (ItemNotFoundError) and belong to the caller (ForbiddenError).

Timeline:
=========
    following(U) ──▶ for each followed user F, skipping users U has blocked
                        └─▶ F's TIMELINE_PER_USER_LIMIT most recent coordinates
                 ──▶ concatenated in following order (most recent follow first)

There is no global sort or pagination across the merged result.
"""

from typing import Optional

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.shared.adapters.storage import LocalImageStorage
from src.shared.core.exceptions import (
    ConflictError,
    CoordinateNotFoundError,
    ForbiddenError,
    ItemNotFoundError,
    NotFoundError,
)
from src.shared.core.logging import logger
from src.shared.models.coordinate import Coordinate
from src.shared.models.enums import NotificationAction
from src.shared.models.like_coordinate import LikeCoordinate
from src.shared.repositories.block_repository import BlockRepository
from src.shared.repositories.coordinate_repository import CoordinateRepository
from src.shared.repositories.item_repository import ItemRepository
from src.shared.repositories.like_coordinate_repository import LikeCoordinateRepository
from src.shared.repositories.relationship_repository import RelationshipRepository
from src.shared.schemas.coordinate import (
    CoordinateCreate,
    CoordinateFilter,
    CoordinateResponse,
    CoordinateStatistics,
    CoordinateUpdate,
)
from src.shared.services.social_service import SocialService


class CoordinateService:
    """
    Service for coordinate business logic.

    Handles:
    - Coordinate CRUD with atomic item re-linking
    - Likes and like notifications
    - Timeline assembly
    - Search and statistics
    """

    def __init__(
        self,
        session: AsyncSession,
        storage: Optional[LocalImageStorage] = None,
    ) -> None:
        self.session = session
        self.coordinates = CoordinateRepository(session)
        self.items = ItemRepository(session)
        self.likes = LikeCoordinateRepository(session)
        self.relationships = RelationshipRepository(session)
        self.blocks = BlockRepository(session)
        self.social = SocialService(session)
        self.storage = storage or LocalImageStorage()

    # ═══════════════════════════════════════════════════════════════════════════
    # CRUD
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_coordinate(self, user_id: int, data: CoordinateCreate) -> Coordinate:
        """
        Create a coordinate and link the given items to it.

        Raises:
            ItemNotFoundError: A referenced item does not exist
            ForbiddenError: A referenced item belongs to someone else
        """
        item_ids = list(dict.fromkeys(data.item_ids))
        await self._check_items_owned(user_id, item_ids)

        async with self.session.begin_nested():
            coordinate = await self.coordinates.create(
                user_id=user_id,
                **data.model_dump(exclude={"item_ids"}),
            )
            await self.items.link_to_coordinate(item_ids, coordinate.id)

        logger.info(
            "Coordinate created",
            coordinate_id=coordinate.id,
            user_id=user_id,
            item_count=len(item_ids),
        )
        return await self._reload(coordinate.id)

    async def get_coordinate(self, coordinate_id: int) -> Coordinate:
        coordinate = await self.coordinates.get_with_items(coordinate_id)
        if not coordinate:
            raise CoordinateNotFoundError(coordinate_id)
        return coordinate

    async def get_coordinate_with_details(
        self,
        coordinate_id: int,
        viewer_id: Optional[int] = None,
    ) -> CoordinateResponse:
        """Coordinate with items, like count and the viewer's like state."""
        coordinate = await self.get_coordinate(coordinate_id)
        return (await self.decorate([coordinate], viewer_id))[0]

    async def update_coordinate(
        self,
        user_id: int,
        coordinate_id: int,
        data: CoordinateUpdate,
    ) -> Coordinate:
        """
        Apply the fields present in `data`; replace the item set when
        `item_ids` is given.

        Raises:
            CoordinateNotFoundError: No such coordinate
            ForbiddenError: Caller is not the owner, or owns none of some items
            ItemNotFoundError: A referenced item does not exist
        """
        coordinate = await self._owned_coordinate(user_id, coordinate_id)

        item_ids: Optional[list[int]] = None
        if data.item_ids is not None:
            item_ids = list(dict.fromkeys(data.item_ids))
            await self._check_items_owned(user_id, item_ids)

        values = data.model_dump(exclude_unset=True, exclude_none=True, exclude={"item_ids"})

        async with self.session.begin_nested():
            await self.coordinates.apply(coordinate, values)
            if item_ids is not None:
                await self.items.unlink_from_coordinate(coordinate_id)
                await self.items.link_to_coordinate(item_ids, coordinate_id)

        logger.info(
            "Coordinate updated",
            coordinate_id=coordinate_id,
            fields=sorted(values),
            relinked=item_ids is not None,
        )
        return await self._reload(coordinate_id)

    async def delete_coordinate(self, user_id: int, coordinate_id: int) -> None:
        """Detach the coordinate's items, delete it and its stored picture."""
        coordinate = await self._owned_coordinate(user_id, coordinate_id)
        picture = coordinate.picture

        async with self.session.begin_nested():
            await self.items.unlink_from_coordinate(coordinate_id)
            await self.coordinates.delete_instance(coordinate)

        self.storage.delete_after_commit(self.session, picture)
        logger.info("Coordinate deleted", coordinate_id=coordinate_id, user_id=user_id)

    async def upload_coordinate_picture(
        self,
        user_id: int,
        coordinate_id: int,
        upload: UploadFile,
    ) -> Coordinate:
        coordinate = await self._owned_coordinate(user_id, coordinate_id)
        previous = coordinate.picture
        url = await self.storage.save(upload, "coordinates")
        await self.coordinates.apply(coordinate, {"picture": url})
        self.storage.delete_after_commit(self.session, previous)
        return await self._reload(coordinate_id)

    # ═══════════════════════════════════════════════════════════════════════════
    # LISTING, SEARCH, STATISTICS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_user_coordinates(
        self,
        user_id: int,
        limit: int,
        offset: int,
    ) -> tuple[list[Coordinate], int]:
        return await self.coordinates.get_by_user_id(user_id, limit, offset)

    async def search_coordinates(self, filters: CoordinateFilter) -> tuple[list[Coordinate], int]:
        return await self.coordinates.search(
            limit=filters.limit,
            offset=filters.offset,
            user_id=filters.user_id,
            season=filters.season,
            tpo=filters.tpo,
            min_rating=filters.min_rating,
            max_rating=filters.max_rating,
        )

    async def get_user_coordinate_statistics(self, user_id: int) -> CoordinateStatistics:
        season_count = await self.coordinates.count_by(user_id, "season")
        return CoordinateStatistics(
            total_coordinates=sum(season_count.values()),
            season_count=season_count,
            tpo_count=await self.coordinates.count_by(user_id, "tpo"),
            total_likes=await self.likes.total_received_by_user(user_id),
            average_rating=await self.coordinates.average_rating(user_id),
        )

    async def get_timeline_coordinates(
        self,
        user_id: int,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Coordinate]:
        """
        Recent coordinates of followed users, skipping users the caller blocked.

        limit / offset are accepted for interface compatibility but are not
        applied to the merged result.
        """
        following, _ = await self.relationships.get_following(user_id)
        blocked = await self.blocks.get_blocked_ids(user_id)

        timeline: list[Coordinate] = []
        for followed in following:
            if followed.id in blocked:
                continue
            timeline.extend(
                await self.coordinates.get_recent_by_user(
                    followed.id,
                    settings.TIMELINE_PER_USER_LIMIT,
                )
            )
        return timeline

    # ═══════════════════════════════════════════════════════════════════════════
    # LIKES
    # ═══════════════════════════════════════════════════════════════════════════

    async def like_coordinate(self, user_id: int, coordinate_id: int) -> LikeCoordinate:
        """
        Like a coordinate and notify its owner (unless liking one's own).

        Raises:
            CoordinateNotFoundError: No such coordinate
            ConflictError: Already liked
        """
        coordinate = await self.coordinates.get(coordinate_id)
        if not coordinate:
            raise CoordinateNotFoundError(coordinate_id)

        if await self.likes.exists_for(user_id, coordinate_id):
            raise ConflictError("already liked")

        like = await self.likes.create_guarded(user_id=user_id, coordinate_id=coordinate_id)
        if like is None:
            raise ConflictError("already liked")

        logger.info("Coordinate liked", user_id=user_id, coordinate_id=coordinate_id)

        await self.social.notify(
            sender_id=user_id,
            receiver_id=coordinate.user_id,
            action=NotificationAction.LIKE,
            coordinate_id=coordinate_id,
            like_coordinate_id=like.id,
        )
        return like

    async def unlike_coordinate(self, user_id: int, coordinate_id: int) -> None:
        like = await self.likes.get_by_user_and_coordinate(user_id, coordinate_id)
        if not like:
            raise NotFoundError("not liked")
        await self.likes.delete_instance(like)
        logger.info("Coordinate unliked", user_id=user_id, coordinate_id=coordinate_id)

    async def get_coordinate_likes(
        self,
        coordinate_id: int,
        limit: int,
        offset: int,
    ) -> tuple[list[LikeCoordinate], int]:
        if not await self.coordinates.exists(coordinate_id):
            raise CoordinateNotFoundError(coordinate_id)
        return await self.likes.get_by_coordinate_id(coordinate_id, limit, offset)

    async def is_liked_by_user(self, user_id: int, coordinate_id: int) -> bool:
        return await self.likes.exists_for(user_id, coordinate_id)

    async def count_likes(self, coordinate_id: int) -> int:
        return await self.likes.count_by_coordinate_id(coordinate_id)

    # ═══════════════════════════════════════════════════════════════════════════
    # RESPONSE DECORATION
    # ═══════════════════════════════════════════════════════════════════════════

    async def decorate(
        self,
        coordinates: list[Coordinate],
        viewer_id: Optional[int] = None,
    ) -> list[CoordinateResponse]:
        """
        Build responses with like_count and is_liked for `viewer_id`.

        Two grouped queries regardless of how many coordinates are passed.
        """
        ids = [coordinate.id for coordinate in coordinates]
        counts = await self.likes.count_by_coordinate_ids(ids)
        liked = await self.likes.liked_coordinate_ids(viewer_id, ids) if viewer_id else set()

        responses = []
        for coordinate in coordinates:
            response = CoordinateResponse.model_validate(coordinate)
            response.like_count = counts.get(coordinate.id, 0)
            response.is_liked = coordinate.id in liked
            responses.append(response)
        return responses

    # ═══════════════════════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _owned_coordinate(self, user_id: int, coordinate_id: int) -> Coordinate:
        coordinate = await self.coordinates.get(coordinate_id)
        if not coordinate:
            raise CoordinateNotFoundError(coordinate_id)
        if coordinate.user_id != user_id:
            raise ForbiddenError("you can only modify your own coordinates")
        return coordinate

    async def _check_items_owned(self, user_id: int, item_ids: list[int]) -> None:
        items = await self.items.get_by_ids(item_ids)
        found = {item.id for item in items}
        for item_id in item_ids:
            if item_id not in found:
                raise ItemNotFoundError(item_id)
        for item in items:
            if item.user_id != user_id:
                raise ForbiddenError(
                    "items must belong to the coordinate owner",
                    details={"item_id": item.id},
                )

    async def _reload(self, coordinate_id: int) -> Coordinate:
        coordinate = await self.coordinates.get_with_items(coordinate_id)
        if not coordinate:
            raise CoordinateNotFoundError(coordinate_id)
        return coordinate
