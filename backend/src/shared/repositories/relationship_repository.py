"""
Relationship Repository

Follow edges and the follower / following listings.

Listing Queries:
================
    followers of U:  users JOIN relationships ON users.id = follower_id
                     WHERE followed_id = U
    following of U:  users JOIN relationships ON users.id = followed_id
                     WHERE follower_id = U

Both are ordered by the edge's created_at, newest first.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.repositories.base import BaseRepository
from src.shared.models.relationship import Relationship
from src.shared.models.user import User


class RelationshipRepository(BaseRepository[Relationship]):
    """Repository for follow edges."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Relationship, session)

    async def get_edge(self, follower_id: int, followed_id: int) -> Optional[Relationship]:
        result = await self.session.execute(
            select(Relationship).where(
                Relationship.follower_id == follower_id,
                Relationship.followed_id == followed_id,
            )
        )
        return result.scalar_one_or_none()

    async def is_following(self, follower_id: int, followed_id: int) -> bool:
        return await self.get_edge(follower_id, followed_id) is not None

    async def get_followers(
        self,
        user_id: int,
        limit: int,
        offset: int,
    ) -> tuple[list[User], int]:
        """Users following `user_id`, most recent edge first."""
        query = (
            select(User)
            .join(Relationship, Relationship.follower_id == User.id)
            .where(Relationship.followed_id == user_id)
        )
        total = await self._count(query)
        users = await self._scalars(
            query.order_by(Relationship.created_at.desc(), Relationship.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return users, total

    async def get_following(
        self,
        user_id: int,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> tuple[list[User], int]:
        """
        Users followed by `user_id`, most recent edge first.

        limit=None returns the full list (timeline assembly).
        """
        query = (
            select(User)
            .join(Relationship, Relationship.followed_id == User.id)
            .where(Relationship.follower_id == user_id)
        )
        total = await self._count(query)
        query = query.order_by(Relationship.created_at.desc(), Relationship.id.desc()).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        users = await self._scalars(query)
        return users, total
