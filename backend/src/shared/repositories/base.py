"""
Base Repository

Generic repository with the CRUD operations every entity repository shares.

What This Provides:
===================
- get(id)           → Fetch single record by id
- get_by_ids()      → Fetch multiple records by ids
- exists()          → Existence check without loading
- create()          → INSERT, flush, refresh
- create_guarded()  → create() in a SAVEPOINT, None on a duplicate
- apply()           → Apply a field mapping to an already loaded instance
- delete_instance() → Hard delete an already loaded instance

Generic Type Pattern:
=====================
    class ItemRepository(BaseRepository[Item]):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(Item, session)

    repo = ItemRepository(db)
    item = await repo.get(7)  # Item | None

flush() vs commit():
====================
Repositories only flush(). get_db() commits once per request, and services
wrap multi-statement units in session.begin_nested() where they must be
atomic on their own.
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from src.shared.models.base import Base


ModelType = TypeVar("ModelType", bound=Base)

# PostgreSQL unique_violation
UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(error: IntegrityError) -> bool:
    """True when an IntegrityError comes from a unique constraint or index."""
    orig = error.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        sqlstate = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if sqlstate == UNIQUE_VIOLATION_SQLSTATE:
            return True
    # sqlite3 exposes no sqlstate
    return "UNIQUE constraint failed" in str(orig)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # QUERY HELPERS
    # ═══════════════════════════════════════════════════════════════════════════

    def newest_first(self, query: Select) -> Select:
        """Order by creation time, newest first, id as tie breaker."""
        return query.order_by(self.model.created_at.desc(), self.model.id.desc())

    async def _scalars(self, query: Select) -> list[Any]:
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def _count(self, query: Select) -> int:
        """Count rows produced by `query` (a select of the model)."""
        result = await self.session.execute(
            select(sql_count()).select_from(query.order_by(None).subquery())
        )
        return result.scalar() or 0

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: int) -> Optional[ModelType]:
        """
        Get a single record by id.

        Returns:
            The model instance if found, None otherwise
        """
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def get_by_ids(self, ids: list[int]) -> list[ModelType]:
        """
        Get multiple records by id with a single IN query.

        Returns:
            Found instances (may be fewer than requested)
        """
        if not ids:
            return []
        return await self._scalars(select(self.model).where(self.model.id.in_(ids)))

    async def exists(self, record_id: int) -> bool:
        result = await self.session.execute(
            select(sql_count()).select_from(self.model).where(self.model.id == record_id)
        )
        return (result.scalar() or 0) > 0

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        Flushes to obtain the generated id and refreshes to load defaults.

        Example:
            like = await repo.create(user_id=3, coordinate_id=9)
            like.id  # assigned by the database
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def create_guarded(self, **kwargs: Any) -> Optional[ModelType]:
        """
        Create a record inside a SAVEPOINT.

        Returns None instead of raising when the INSERT violates a unique
        constraint (a concurrent duplicate). Other integrity errors, such as
        a missing foreign key, propagate. Either way only the savepoint is
        rolled back and the request transaction stays usable.

        Example:
            like = await repo.create_guarded(user_id=3, coordinate_id=9)
            if like is None:
                raise ConflictError("already liked")
        """
        try:
            async with self.session.begin_nested():
                return await self.create(**kwargs)
        except IntegrityError as e:
            if not is_unique_violation(e):
                raise
            return None

    # ═══════════════════════════════════════════════════════════════════════════
    # UPDATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def apply(self, instance: ModelType, values: dict[str, Any]) -> ModelType:
        """
        Write every key of `values` onto a loaded instance and flush.

        Used with `model_dump(exclude_unset=True)` so that only fields the
        client actually sent are touched.
        """
        for field, value in values.items():
            if hasattr(instance, field):
                setattr(instance, field, value)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    # ═══════════════════════════════════════════════════════════════════════════
    # DELETE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def delete_instance(self, instance: ModelType) -> None:
        await self.session.delete(instance)
        await self.session.flush()
