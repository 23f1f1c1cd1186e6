"""Shared test fixtures for Edge Notes."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from edgenotes.config import Settings
from edgenotes.main import create_app
from edgenotes.services.page_service import PageStore
from edgenotes.storage import MemoryKeyValueStore, open_store

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path

    from edgenotes.storage import KeyValueStore

TEST_SECRET_KEY = "test-secret-key-with-at-least-32-characters"
TEST_ADMIN_PASSWORD = "correct-horse-battery"


@asynccontextmanager
async def create_test_client(
    settings: Settings,
    store: KeyValueStore | None = None,
) -> AsyncGenerator[AsyncClient]:
    """Create an HTTP test client with an opened store.

    Performs the store setup of the application lifespan by hand because
    ASGITransport does not trigger it.
    """
    app = create_app(settings)
    settings.validate_runtime_security()

    if store is None:
        store = await open_store(settings)
    app.state.store = store

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="https://test",
    ) as ac:
        yield ac

    await store.close()


def session_cookie_from(set_cookie: str) -> str:
    """Turn a ``Set-Cookie`` value into the matching ``Cookie`` header value."""
    return set_cookie.split(";", 1)[0]


async def login(client: AsyncClient, password: str = TEST_ADMIN_PASSWORD) -> str:
    """Log in and return a ``Cookie`` header value carrying the session."""
    resp = await client.post("/api/login", json={"password": password})
    assert resp.status_code == 302
    # Tests send the cookie explicitly; keep the jar from doing it implicitly.
    client.cookies.clear()
    return session_cookie_from(resp.headers["set-cookie"])


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Create test settings backed by a temporary SQLite database."""
    db_path = tmp_path / "test.db"
    return Settings(
        _env_file=None,
        secret_key=TEST_SECRET_KEY,
        admin_password=TEST_ADMIN_PASSWORD,
        debug=True,
        store_backend="sqlite",
        database_url=f"sqlite+aiosqlite:///{db_path}",
    )


@pytest.fixture
def memory_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def page_store(memory_store: MemoryKeyValueStore) -> PageStore:
    return PageStore(memory_store)


@pytest.fixture
async def client(test_settings: Settings) -> AsyncGenerator[AsyncClient]:
    """Create test HTTP client with initialized app state."""
    async with create_test_client(test_settings) as ac:
        yield ac


@pytest.fixture
async def auth_cookie(client: AsyncClient) -> str:
    return await login(client)
