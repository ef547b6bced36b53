"""Root conftest: test environment, database and HTTP client fixtures.

Every test gets a fresh SQLite database file under tmp_path, with
SAVEPOINTs and foreign keys enabled the same way the application enables
them for SQLite URLs.
"""

import itertools
import os
import tempfile

# Must be set before anything imports src.config.settings
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("UPLOAD_PATH", tempfile.mkdtemp(prefix="speadwear-uploads-"))

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from src.api.dependencies.database import get_db
from src.api.dependencies.services import get_storage
from src.api.main import app
from src.shared.adapters.storage import LocalImageStorage
from src.shared.db import configure_sqlite
from src.shared.models import Base
from src.shared.repositories.item_repository import ItemRepository
from src.shared.repositories.user_repository import UserRepository
from src.shared.schemas.coordinate import CoordinateCreate
from src.shared.services.coordinate_service import CoordinateService
from src.shared.utils.security import SecurityUtils
from tests.helpers import PASSWORD

# bcrypt is slow on purpose; hash once for all factory users
PASSWORD_HASH = SecurityUtils.hash_password(PASSWORD)


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
    )
    configure_sqlite(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def storage(tmp_path):
    return LocalImageStorage(base_path=str(tmp_path / "uploads"), url_prefix="/uploads")


# ─── FACTORIES ──────────────────────────────────────────────────


@pytest.fixture
def make_user(db):
    counter = itertools.count(1)

    async def _make(name=None, email=None, activated=True, **overrides):
        n = next(counter)
        return await UserRepository(db).create(
            name=name or f"user{n}",
            email=email or f"user{n}@example.com",
            password_hash=PASSWORD_HASH,
            activated=activated,
            **overrides,
        )

    return _make


@pytest.fixture
def make_item(db):
    async def _make(user, **overrides):
        values = {"super_item": "tops", "season": 1, "tpo": 2, "color": 1}
        values.update(overrides)
        return await ItemRepository(db).create(user_id=user.id, **values)

    return _make


@pytest.fixture
def make_coordinate(db, storage):
    async def _make(user, items=(), **overrides):
        values = {"season": 1, "tpo": 2}
        values.update(overrides)
        data = CoordinateCreate(item_ids=[item.id for item in items], **values)
        return await CoordinateService(db, storage).create_coordinate(user.id, data)

    return _make


# ─── HTTP CLIENT ────────────────────────────────────────────────


@pytest.fixture
async def client(session_factory, storage):
    """FastAPI test client with the DB and storage dependencies overridden."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
