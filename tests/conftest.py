"""Shared fixtures.

Service tests run against an in-memory SQLite database. API tests get a
TestClient whose products service is bound to its own in-memory database.
"""

from collections.abc import AsyncIterator, Iterator
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from product_catalog.infrastructure import database
from product_catalog.infrastructure.database import Base
from product_catalog.main import app
from product_catalog.products import ProductsService, get_products_service

TEST_DATABASE_URL = "sqlite+aiosqlite://"


def make_engine() -> AsyncEngine:
    """Create an in-memory SQLite engine shared across sessions."""
    return create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """In-memory database with the catalog schema."""
    engine = make_engine()
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def logger() -> MagicMock:
    """Logger stand-in that records calls."""
    return MagicMock()


@pytest.fixture
def service(session_factory: async_sessionmaker[AsyncSession], logger: MagicMock) -> ProductsService:
    """Products service bound to the test database."""
    return ProductsService(session_factory, logger=logger)


# ============================================================================
# Client Fixtures
# ============================================================================


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    """Test client backed by a fresh in-memory database."""
    engine = make_engine()
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    monkeypatch.setattr(database, "engine", engine)
    app.dependency_overrides[get_products_service] = lambda: ProductsService(factory)

    with TestClient(app) as client:
        client.portal.call(create_schema, engine)
        yield client

    app.dependency_overrides.clear()
