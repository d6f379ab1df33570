"""Storage Failures — how engine errors surface through the user routes.

Invariants:
    - Connection failure → 500 "DB connect error: ..." on every storage route
    - Create statement error → 500 with the driver message echoed
    - Read/update/delete statement errors collapse into 404
"""

import pytest
from sqlalchemy.exc import OperationalError

import users_api.infrastructure.database as db_module
from users_api.api.routes.users import get_user_repository
from users_api.infrastructure.database import DatabaseSessionManager
from users_api.main import app


def _engine_error(message: str) -> OperationalError:
    return OperationalError("STATEMENT", {}, Exception(message))


class _FailingRepository:
    """UserRepository whose every statement fails inside the engine."""

    async def create(self, name, email):
        raise _engine_error("disk I/O error")

    async def get(self, user_id):
        raise _engine_error("disk I/O error")

    async def update(self, user_id, name, email):
        raise _engine_error("disk I/O error")

    async def delete(self, user_id):
        raise _engine_error("disk I/O error")


@pytest.fixture
def failing_repository(client):
    app.dependency_overrides[get_user_repository] = lambda: _FailingRepository()
    yield
    app.dependency_overrides.pop(get_user_repository, None)


@pytest.fixture
async def unreachable_db(client, monkeypatch):
    manager = DatabaseSessionManager(
        "sqlite+aiosqlite:////nonexistent-dir/users.db", null_pool=True,
    )
    monkeypatch.setattr(db_module, "db_manager", manager)
    yield manager
    await manager.dispose()


async def test_create_statement_error_returns_500_with_message(client, failing_repository):
    res = await client.post("/user", json={"Name": "Ada", "Email": "ada@example.com"})
    assert res.status_code == 500
    assert res.text == "Failed to create user: disk I/O error\n"


async def test_read_statement_error_collapses_to_404(client, failing_repository):
    res = await client.get("/user/1")
    assert res.status_code == 404
    assert res.text == "User not found\n"


async def test_update_statement_error_collapses_to_404(client, failing_repository):
    res = await client.put("/user/1", json={"Name": "x", "Email": "y"})
    assert res.status_code == 404
    assert res.text == "User not found or update failed\n"


async def test_delete_statement_error_collapses_to_404(client, failing_repository):
    res = await client.delete("/user/1")
    assert res.status_code == 404
    assert res.text == "User not found or delete failed\n"


@pytest.mark.parametrize("method,path", [
    ("POST", "/user"),
    ("GET", "/user/1"),
    ("PUT", "/user/1"),
    ("DELETE", "/user/1"),
])
async def test_connection_failure_returns_500(client, unreachable_db, method, path):
    res = await client.request(
        method, path, json={"Name": "Ada", "Email": "ada@example.com"},
    )
    assert res.status_code == 500
    assert res.text.startswith("DB connect error: ")


async def test_bad_id_wins_over_connection_failure(client, unreachable_db):
    res = await client.delete("/user/abc")
    assert res.status_code == 400
