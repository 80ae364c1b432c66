"""
Portfolio API — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the whole suite.
How:   Environment is pinned before any `portfolio` import; endpoint tests
       run the real app against an in-memory SQLite database and a fake
       identity service installed on app.state.

Fixtures:
    mock_db_session:   AsyncMock session for service unit tests
    fake_identity:     IdentityService accepting only ADMIN_TOKEN
    db_engine:         in-memory SQLite engine with both tables created
    session_factory:   async_sessionmaker bound to db_engine
    test_client:       httpx AsyncClient talking to the app over ASGI
    lenient_client:    test_client variant that returns unhandled faults as 500s
    admin_headers:     Authorization header carrying ADMIN_TOKEN
"""

import os
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

# Pin configuration BEFORE the application modules read it
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SUPABASE_URL"] = "https://identity.test"
os.environ["SUPABASE_ANON_KEY"] = "anon-test-key"
os.environ["CLOUDINARY_CLOUD_NAME"] = "test-cloud"
os.environ["CLOUDINARY_API_KEY"] = "test-api-key"
os.environ["CLOUDINARY_API_SECRET"] = "test-api-secret"
os.environ["CORS_ORIGINS"] = "*"
os.environ["API_PREFIX"] = "/api"
os.environ["EXPOSE_ERROR_DETAILS"] = "true"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from portfolio.database import Base, create_session_factory
from portfolio.exceptions import IdentityServiceError
from portfolio.services.auth_service import IdentityService
import portfolio.models  # noqa: F401

ADMIN_TOKEN = "valid-admin-token"
ADMIN_USER = {"id": "7f1c0d7e-admin", "email": "studio@example.com", "role": "authenticated"}


class FakeIdentityService(IdentityService):
    """Accepts ADMIN_TOKEN, rejects everything else, and records every lookup."""

    def __init__(self, users: Optional[Dict[str, Dict[str, Any]]] = None):
        self.users = users if users is not None else {ADMIN_TOKEN: ADMIN_USER}
        self.calls: List[str] = []

    async def get_user(self, token: str) -> Optional[Dict[str, Any]]:
        self.calls.append(token)
        if token not in self.users:
            raise IdentityServiceError("invalid JWT")
        return self.users[token]


@pytest.fixture
def mock_db_session():
    """
    A mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def fake_identity():
    return FakeIdentityService()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite shared by every session of one test (StaticPool)."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest_asyncio.fixture
async def test_client(session_factory, fake_identity):
    """
    HTTPX AsyncClient wired to the app.

    ASGITransport does not run the lifespan, so the collaborators it would
    build are installed on app.state here.
    """
    from portfolio.main import app

    app.state.session_factory = session_factory
    app.state.identity_service = fake_identity

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def lenient_client(test_client):
    """
    Same app, but faults that escape every handler come back as the 500
    response instead of being re-raised into the test.
    """
    from portfolio.main import app

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_booking_body():
    return {
        "client_name": "Jane",
        "client_email": "jane@x.com",
        "event_date": "2024-06-01",
        "service_type": "Photography",
        "message": "hi",
    }


@pytest.fixture
def sample_project_body():
    return {
        "title": "Golden Hour Wedding",
        "category": "Photography",
        "media_url": "https://res.cloudinary.com/test-cloud/image/upload/wedding.jpg",
        "thumbnail_url": "https://res.cloudinary.com/test-cloud/image/upload/t_thumb/wedding.jpg",
    }
