"""
Database Dependency

FastAPI dependency for database sessions. Tests override `get_db` through
`app.dependency_overrides`.

Usage:
======
    from src.api.dependencies.database import DbSession

    @router.get("/users/{user_id}")
    async def get_user(user_id: int, db: DbSession):
        return await UserService(db).get_user(user_id)
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.db import get_db as _get_db


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield the request's session (commit on success, rollback on error).
    """
    async for session in _get_db():
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db)]
