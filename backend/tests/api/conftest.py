"""API test fixtures - FastAPI app driven through httpx over ASGI.

Invariants:
    - get_db dependency overridden to use the per-test in-memory database
    - db_manager patched so the readiness probe sees the test engine
    - Lifespan is not run by ASGITransport; the test DB is built by fixtures
"""

import pytest
from httpx import ASGITransport, AsyncClient

import userapi.infrastructure.database as db_module
from userapi.infrastructure.database import DatabaseSessionManager, get_db
from userapi.main import app


def _fake_manager(engine, session_factory) -> DatabaseSessionManager:
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = engine
    manager._session_factory = session_factory
    return manager


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    db_module.db_manager = _fake_manager(test_engine, test_session_factory)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def lenient_client():
    """Client that returns 500 responses instead of re-raising app exceptions."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def create_user(client):
    """Helper: POST a user and return the decoded response body."""
    async def _create(name: str = "Ada Lovelace", email: str = "ada@example.com"):
        res = await client.post("/api/users", json={"name": name, "email": email})
        assert res.status_code == 201, res.text
        return res.json()
    return _create
