"""
PasteBin Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures (all function-scoped, created fresh for each test):
    ├── store:        Empty PasteStore
    ├── app:          FastAPI app built around `store`
    ├── test_client:  HTTPX AsyncClient talking to `app` in-process
    └── sample_paste: Submission payload used across route tests
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.main import create_app
from app.services.paste_store import PasteStore


@pytest.fixture
def store():
    """A fresh, empty paste store."""
    return PasteStore()


@pytest.fixture
def app(store):
    """
    An application instance serving `store`.

    Each test gets its own app, so rate limiter state never leaks
    between tests.
    """
    return create_app(store=store)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_paste():
    return {"content": "print('hi')", "language": "python", "title": "demo"}
