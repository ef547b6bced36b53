"""
Notification Repository

Notification rows addressed to a receiver, plus read-state updates.

Common Operations:
==================
- get_by_receiver()       → All notifications for a receiver, newest first
- get_unread()            → checked = false only
- count_unread()          → COUNT of checked = false
- mark_all_as_read()      → Bulk UPDATE scoped to one receiver
"""

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.repositories.base import BaseRepository
from src.shared.models.notification import Notification


class NotificationRepository(BaseRepository[Notification]):
    """Repository for Notification database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Notification, session)

    async def get_by_receiver(
        self,
        receiver_id: int,
        limit: int,
        offset: int,
    ) -> tuple[list[Notification], int]:
        """
        Notifications for a receiver, newest first.

        Returns:
            (notifications, total for the receiver, read and unread)
        """
        query = select(Notification).where(Notification.receiver_id == receiver_id)
        total = await self._count(query)
        notifications = await self._scalars(
            self.newest_first(query).offset(offset).limit(limit)
        )
        return notifications, total

    async def get_unread(
        self,
        receiver_id: int,
        limit: int,
        offset: int,
    ) -> list[Notification]:
        query = select(Notification).where(
            Notification.receiver_id == receiver_id,
            Notification.checked.is_(False),
        )
        return await self._scalars(self.newest_first(query).offset(offset).limit(limit))

    async def count_unread(self, receiver_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Notification.id)).where(
                Notification.receiver_id == receiver_id,
                Notification.checked.is_(False),
            )
        )
        return result.scalar() or 0

    async def mark_all_as_read(self, receiver_id: int) -> int:
        """
        Flip every unread notification of `receiver_id` to checked.

        SQL Generated:
            UPDATE notifications SET checked = true, updated_at = :now
            WHERE receiver_id = :rid AND checked = false

        Returns:
            Number of rows updated
        """
        result = await self.session.execute(
            update(Notification)
            .where(
                Notification.receiver_id == receiver_id,
                Notification.checked.is_(False),
            )
            .values(checked=True)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.flush()
        return result.rowcount or 0
