"""
Comment Repository
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.repositories.base import BaseRepository
from src.shared.models.comment import Comment


class CommentRepository(BaseRepository[Comment]):
    """Repository for Comment database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Comment, session)

    async def get_by_coordinate_id(
        self,
        coordinate_id: int,
        limit: int,
        offset: int,
    ) -> tuple[list[Comment], int]:
        """Comments on a coordinate, newest first, with total count."""
        query = select(Comment).where(Comment.coordinate_id == coordinate_id)
        total = await self._count(query)
        comments = await self._scalars(self.newest_first(query).offset(offset).limit(limit))
        return comments, total
