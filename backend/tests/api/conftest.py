"""API test fixtures — FastAPI test client backed by the in-memory database.

Invariants:
    - db_manager is swapped for one bound to the test engine, so routes go
      through the real connect/rollback/close path
    - dependency_overrides and db_manager are restored after every test

Design Decisions:
    - Manager built with __new__: avoids creating a second engine just to replace it
"""

import pytest
from httpx import ASGITransport, AsyncClient

import users_api.infrastructure.database as db_module
from users_api.infrastructure.database import DatabaseSessionManager
from users_api.main import app
from users_api.models.user import User


@pytest.fixture
async def test_manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
async def client(test_manager):
    """FastAPI test client with db_manager pointed at the test DB."""
    original_manager = db_module.db_manager
    db_module.db_manager = test_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_user(test_db):
    """Insert a user directly into the test DB."""
    user = User(name="Grace", email="grace@example.com")
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user
