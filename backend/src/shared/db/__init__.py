"""
Database Module

Database connectivity and session management for Speadwear.

    FastAPI route
        │  Depends(get_db)
        ▼
    AsyncSession  (one per request, commit on success / rollback on error)
        │  Service(session) → Repository(session)
        ▼
    PostgreSQL (asyncpg) / SQLite (aiosqlite, tests)
"""

from src.shared.db.session import (
    get_db,
    init_db,
    close_db,
    configure_sqlite,
    AsyncSessionLocal,
    engine,
)

__all__ = [
    "get_db",
    "init_db",
    "close_db",
    "configure_sqlite",
    "AsyncSessionLocal",
    "engine",
]
