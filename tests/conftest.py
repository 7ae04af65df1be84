"""
Pytest configuration and fixtures.
Provides test app client and async DB session replacement.
"""

import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.session import get_db


# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_db_session():
    """
    Create a test database session.
    Uses in-memory SQLite for fast tests.
    """
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    test_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    
    async with test_session_maker() as session:
        yield session
    
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture(scope="function")
async def test_client(test_db_session):
    """
    Create a test HTTP client whose requests share the test database session.
    """
    async def _override_get_db():
        yield test_db_session
    
    app.dependency_overrides[get_db] = _override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def user_headers(test_client):
    """Register a user with weekends excluded and return its identity header."""
    response = await test_client.post(
        "/api/v1/users",
        json={
            "email": "intern@example.com",
            "firstName": "Sam",
            "internshipConfig": {
                "targetHours": 100,
                "excludeWeekends": {"saturday": True, "sunday": True},
                "lunchBreak": {"enabled": True, "hours": 1},
            },
        },
    )
    assert response.status_code == 201
    return {"X-User-Id": response.json()["id"]}
