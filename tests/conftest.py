"""Shared fixtures for catalog tests.

Every test gets its own in-memory SQLite database so state never
leaks between tests.
"""

import os

# Must be set before app modules build their settings and engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")
os.environ.setdefault("LOG_JSON", "false")

from collections.abc import AsyncGenerator
from decimal import Decimal

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.catalog.mapper import ProductMapper
from app.catalog.repository import ProductRepository
from app.catalog.schemas import ProductRequest
from app.catalog.service import CatalogService
from app.infrastructure.database import Base, get_session
from app.main import app


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with the catalog schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Database session for a single test."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def repository(session: AsyncSession) -> ProductRepository:
    """Product repository on the test session."""
    return ProductRepository(session)


@pytest.fixture
def service(repository: ProductRepository) -> CatalogService:
    """Catalog service wired to the test database."""
    return CatalogService(repository, ProductMapper())


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def product_request() -> ProductRequest:
    """A valid product request."""
    return ProductRequest(
        name="Test Product",
        description="Test Description",
        price=Decimal("99.99"),
        category="Electronics",
        inventory_count=10,
        image_url="http://example.com/test.jpg",
    )


@pytest.fixture
def make_request():
    """Factory for product requests with overridable fields."""

    def _make(**overrides) -> ProductRequest:
        fields = {
            "name": "Sample Product",
            "description": "Sample Description",
            "price": Decimal("10.00"),
            "category": "General",
            "inventory_count": 5,
            "image_url": None,
        }
        fields.update(overrides)
        return ProductRequest(**fields)

    return _make


# ============================================================================
# Client Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def api_client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client for the app, with sessions on the test database."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
