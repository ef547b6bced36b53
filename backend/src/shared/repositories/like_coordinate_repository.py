"""
LikeCoordinate Repository

Like rows and the read queries used to decorate coordinate responses.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.repositories.base import BaseRepository
from src.shared.models.coordinate import Coordinate
from src.shared.models.like_coordinate import LikeCoordinate


class LikeCoordinateRepository(BaseRepository[LikeCoordinate]):
    """Repository for LikeCoordinate database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(LikeCoordinate, session)

    async def get_by_user_and_coordinate(
        self,
        user_id: int,
        coordinate_id: int,
    ) -> Optional[LikeCoordinate]:
        result = await self.session.execute(
            select(LikeCoordinate).where(
                LikeCoordinate.user_id == user_id,
                LikeCoordinate.coordinate_id == coordinate_id,
            )
        )
        return result.scalar_one_or_none()

    async def exists_for(self, user_id: int, coordinate_id: int) -> bool:
        return await self.get_by_user_and_coordinate(user_id, coordinate_id) is not None

    async def count_by_coordinate_id(self, coordinate_id: int) -> int:
        """
        Number of likes on a coordinate.

        SQL Generated:
            SELECT COUNT(id) FROM like_coordinates WHERE coordinate_id = :cid
        """
        result = await self.session.execute(
            select(func.count(LikeCoordinate.id)).where(
                LikeCoordinate.coordinate_id == coordinate_id
            )
        )
        return result.scalar() or 0

    async def count_by_coordinate_ids(self, coordinate_ids: list[int]) -> dict[int, int]:
        """Like counts for several coordinates in one grouped query."""
        if not coordinate_ids:
            return {}
        result = await self.session.execute(
            select(LikeCoordinate.coordinate_id, func.count(LikeCoordinate.id))
            .where(LikeCoordinate.coordinate_id.in_(coordinate_ids))
            .group_by(LikeCoordinate.coordinate_id)
        )
        return {coordinate_id: count for coordinate_id, count in result.all()}

    async def liked_coordinate_ids(self, user_id: int, coordinate_ids: list[int]) -> set[int]:
        """Subset of `coordinate_ids` that `user_id` has liked."""
        if not coordinate_ids:
            return set()
        result = await self.session.execute(
            select(LikeCoordinate.coordinate_id).where(
                LikeCoordinate.user_id == user_id,
                LikeCoordinate.coordinate_id.in_(coordinate_ids),
            )
        )
        return set(result.scalars().all())

    async def get_by_coordinate_id(
        self,
        coordinate_id: int,
        limit: int,
        offset: int,
    ) -> tuple[list[LikeCoordinate], int]:
        query = select(LikeCoordinate).where(LikeCoordinate.coordinate_id == coordinate_id)
        total = await self._count(query)
        likes = await self._scalars(self.newest_first(query).offset(offset).limit(limit))
        return likes, total

    async def total_received_by_user(self, user_id: int) -> int:
        """Likes across all coordinates owned by `user_id`."""
        result = await self.session.execute(
            select(func.count(LikeCoordinate.id))
            .join(Coordinate, Coordinate.id == LikeCoordinate.coordinate_id)
            .where(Coordinate.user_id == user_id)
        )
        return result.scalar() or 0
