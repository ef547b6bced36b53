"""
Block Repository
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.repositories.base import BaseRepository
from src.shared.models.block import Block
from src.shared.models.user import User


class BlockRepository(BaseRepository[Block]):
    """Repository for block edges."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Block, session)

    async def get_edge(self, blocker_id: int, blocked_id: int) -> Optional[Block]:
        result = await self.session.execute(
            select(Block).where(
                Block.blocker_id == blocker_id,
                Block.blocked_id == blocked_id,
            )
        )
        return result.scalar_one_or_none()

    async def is_blocked(self, blocker_id: int, blocked_id: int) -> bool:
        """True when `blocker_id` has blocked `blocked_id` (directional)."""
        return await self.get_edge(blocker_id, blocked_id) is not None

    async def get_blocked_users(self, blocker_id: int) -> list[User]:
        """Users blocked by `blocker_id`, most recent block first."""
        return await self._scalars(
            select(User)
            .join(Block, Block.blocked_id == User.id)
            .where(Block.blocker_id == blocker_id)
            .order_by(Block.created_at.desc(), Block.id.desc())
        )

    async def get_blocked_ids(self, blocker_id: int) -> set[int]:
        result = await self.session.execute(
            select(Block.blocked_id).where(Block.blocker_id == blocker_id)
        )
        return set(result.scalars().all())
