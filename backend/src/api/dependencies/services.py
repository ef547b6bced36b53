"""
Service Dependencies

FastAPI dependencies for service injection. Services are created per
request around the request's session.

Usage:
======
    from src.api.dependencies.services import get_social_service

    @router.post("/follow/{user_id}")
    async def follow(
        user_id: int,
        current_user: CurrentUser,
        social_service: SocialService = Depends(get_social_service),
    ):
        await social_service.follow_user(current_user["user_id"], user_id)
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies.database import get_db
from src.shared.adapters.storage import LocalImageStorage
from src.shared.services.auth_service import AuthService
from src.shared.services.coordinate_service import CoordinateService
from src.shared.services.item_service import ItemService
from src.shared.services.social_service import SocialService
from src.shared.services.user_service import UserService


def get_storage() -> LocalImageStorage:
    """Picture storage; overridden in tests to point at a temp directory."""
    return LocalImageStorage()


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
) -> AuthService:
    return AuthService(db)


async def get_user_service(
    db: AsyncSession = Depends(get_db),
) -> UserService:
    return UserService(db)


async def get_item_service(
    db: AsyncSession = Depends(get_db),
    storage: LocalImageStorage = Depends(get_storage),
) -> ItemService:
    return ItemService(db, storage)


async def get_coordinate_service(
    db: AsyncSession = Depends(get_db),
    storage: LocalImageStorage = Depends(get_storage),
) -> CoordinateService:
    return CoordinateService(db, storage)


async def get_social_service(
    db: AsyncSession = Depends(get_db),
) -> SocialService:
    return SocialService(db)
