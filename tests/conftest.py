"""Pytest configuration and fixtures for eventops.

Uses eventops.main.create_app for HTTP tests and
eventops.infrastructure.persistence.database for DB-dependent fixtures.
SECRET_KEY is set before anything reads settings.
"""

import os
import uuid

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-pytest-only-0123456789")

import pytest
from factories import TEST_TENANT_ID, make_user
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from eventops.api.v1.dependencies import get_current_user, get_tenant_id
from eventops.core.limiter import limiter
from eventops.infrastructure.persistence import database
from eventops.main import create_app


@pytest.fixture
def app() -> FastAPI:
    """Fresh application per test so dependency overrides do not leak."""
    application = create_app()
    limiter.enabled = False
    yield application
    limiter.enabled = True
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def as_user(app: FastAPI):
    """Authenticate requests as an in-memory user of TEST_TENANT_ID.

    Returns a setter so tests can switch roles: ``as_user("staff")``.
    """

    def _set(role: str = "admin"):
        user = make_user(role)
        app.dependency_overrides[get_current_user] = lambda: user
        app.dependency_overrides[get_tenant_id] = lambda: TEST_TENANT_ID
        return user

    _set()
    return _set


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL pointing at a migrated Postgres. Skips when it is
    not configured; run without DB via: pytest -m 'not requires_db'.
    """
    engine = database.get_engine()
    if engine is None or database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set DATABASE_URL, then run: alembic upgrade head"
        )
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
    await database.dispose_engine()


@pytest.fixture
def unique_code() -> str:
    return f"test-{uuid.uuid4().hex[:12]}"
