"""
Shopfront Backend: Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests (no DB)
    ├── test_settings:   Settings pointing at a fresh SQLite file in tmp_path
    ├── test_app:        create_app(test_settings) with tables created
    ├── test_client:     HTTPX AsyncClient bound to test_app
    └── db_session:      Session on test_app's store, for direct setup/asserts
"""

import os
import tempfile

# Settings are read at import time; point the default instance at a throwaway
# SQLite file before any shopfront module is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="shopfront_test_"), "default.db"
)
os.environ["LOG_LEVEL"] = "WARNING"

from decimal import Decimal  # noqa: E402
from types import SimpleNamespace  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from shopfront.config import Settings  # noqa: E402
from shopfront.database import create_tables, dispose_engine  # noqa: E402
from shopfront.main import create_app  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Unit-test Fixtures (no database)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_product(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = product
            result = await product_service.get_product(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.scalar = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_product():
    """An object shaped like a loaded Product row (columns + eager-loaded relations)."""
    return SimpleNamespace(
        id=1,
        product_name="Widget",
        price=Decimal("9.99"),
        stock=5,
        category_id=1,
        category=SimpleNamespace(id=1, category_name="Gadgets"),
        tags=[
            SimpleNamespace(id=1, tag_name="new"),
            SimpleNamespace(id=2, tag_name="sale"),
        ],
    )


# ══════════════════════════════════════════════════════════════════════════
# Integration Fixtures (SQLite via aiosqlite)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'shopfront.db'}",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def test_app(test_settings):
    app = create_app(test_settings)
    await create_tables(app.state.engine)
    yield app
    await dispose_engine(app.state.engine)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def db_session(test_app):
    async with test_app.state.session_factory() as session:
        yield session
