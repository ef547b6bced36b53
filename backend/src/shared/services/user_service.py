"""
User Service

Profile and account management for existing users.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.core.exceptions import ConflictError, UserNotFoundError, ValidationError
from src.shared.core.logging import logger
from src.shared.models.user import User
from src.shared.repositories.user_repository import UserRepository
from src.shared.schemas.user import ProfileUpdate, UserUpdate
from src.shared.utils.security import SecurityUtils


class UserService:
    """Service for user profile business logic."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = UserRepository(session)

    async def get_user(self, user_id: int) -> User:
        user = await self.repo.get(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user

    async def get_user_by_email(self, email: str) -> User:
        user = await self.repo.get_by_email(email)
        if not user:
            raise UserNotFoundError(email)
        return user

    async def list_users(self, limit: int, offset: int) -> tuple[list[User], int]:
        return await self.repo.list_users(limit, offset)

    async def update_user(self, user_id: int, data: UserUpdate) -> User:
        """
        Apply the fields present in `data`.

        Raises:
            UserNotFoundError: No such user
            ConflictError: New email already taken by another user
        """
        user = await self.get_user(user_id)
        values = data.model_dump(exclude_unset=True, exclude_none=True)

        new_email = values.get("email")
        if new_email and new_email != user.email and await self.repo.email_exists(new_email):
            raise ConflictError("email already registered")

        user = await self.repo.apply(user, values)
        logger.info("User updated", user_id=user_id, fields=sorted(values))
        return user

    async def update_profile(self, user_id: int, data: ProfileUpdate) -> User:
        user = await self.get_user(user_id)
        return await self.repo.apply(user, data.model_dump(exclude_unset=True, exclude_none=True))

    async def change_password(self, user_id: int, old_password: str, new_password: str) -> None:
        """
        Raises:
            ValidationError: Current password does not match
        """
        user = await self.get_user(user_id)
        if not SecurityUtils.verify_password(old_password, user.password_hash):
            raise ValidationError("current password is incorrect")

        await self.repo.apply(user, {"password_hash": SecurityUtils.hash_password(new_password)})
        logger.info("Password changed", user_id=user_id)

    async def delete_user(self, user_id: int) -> None:
        """Delete a user; owned rows go with it through ON DELETE CASCADE."""
        user = await self.get_user(user_id)
        await self.repo.delete_instance(user)
        logger.info("User deleted", user_id=user_id)
