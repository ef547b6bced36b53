"""
User Repository

Database operations specific to the User model.

Common Operations:
==================
- get_by_email()   → Find user by email address
- email_exists()   → Check if email is already registered
- list_users()     → Paginated user directory with total count
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.repositories.base import BaseRepository
from src.shared.models.user import User


class UserRepository(BaseRepository[User]):
    """Repository for User database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: Email address to search for

        Returns:
            User if found, None otherwise
        """
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """
        Check if email already exists.

        Example:
            if await repo.email_exists("new@example.com"):
                raise ConflictError("email already registered")
        """
        user = await self.get_by_email(email)
        return user is not None

    async def list_users(self, limit: int, offset: int) -> tuple[list[User], int]:
        """All users, newest first, plus the total count."""
        query = select(User)
        total = await self._count(query)
        users = await self._scalars(self.newest_first(query).offset(offset).limit(limit))
        return users, total
