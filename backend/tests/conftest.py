"""
Postboard Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test that touches the store gets its own SQLite file under
       tmp_path, reached through aiosqlite; nothing needs a running server.

Fixture Hierarchy (all function-scoped):
    ├── database_url: sqlite+aiosqlite URL of a fresh database file
    ├── post_store: Connected PostStore over database_url
    ├── mock_post_store: AsyncMock with PostStore's interface
    ├── test_app: FastAPI app wired to post_store
    ├── test_client: HTTPX AsyncClient talking to test_app in-process
    └── sample_payload: {title, content} body
"""

import os
import tempfile
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must be set BEFORE postboard.config is imported: DATABASE_URL has no default
_default_db_dir = tempfile.mkdtemp(prefix="postboard_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_default_db_dir}/default.db"
os.environ["LOG_LEVEL"] = "WARNING"

from postboard.config import Settings  # noqa: E402
from postboard.services.post_store import PostStore  # noqa: E402


@pytest.fixture
def database_url(tmp_path):
    """URL of an empty SQLite database file, unique to the test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'posts.db'}"


@pytest_asyncio.fixture
async def post_store(database_url):
    """
    A connected PostStore over a fresh database.

    The table is created by connect(); the engine is disposed afterwards.
    """
    store = PostStore(database_url, timeout=5.0)
    await store.connect()
    yield store
    await store.close()


@pytest.fixture
def mock_post_store():
    """
    AsyncMock standing in for PostStore.

    Usage:
        mock_post_store.update.return_value = None
        with pytest.raises(NotFoundError):
            await post_service.update_post(mock_post_store, "id", payload)
    """
    return AsyncMock(spec=PostStore)


@pytest.fixture
def test_settings(database_url):
    return Settings(database_url=database_url, log_level="WARNING")


@pytest.fixture
def test_app(test_settings, post_store):
    """
    FastAPI app with post_store attached.

    ASGITransport does not run the lifespan, so the store is attached to
    app.state here the way the lifespan would.
    """
    from postboard.main import create_app

    app = create_app(test_settings)
    app.state.post_store = post_store
    return app


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Async HTTP client routed straight into test_app.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/posts")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_payload():
    return {"title": "First post", "content": "Hello from the test suite."}
