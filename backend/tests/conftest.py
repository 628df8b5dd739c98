"""
Snippetbox — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── snippet_service: MockSnippetService (snippet 1 exists, insert returns 2)
    ├── user_service: MockUserService (alice@example.com / pa$$word is user 1)
    ├── test_client: HTTPX AsyncClient with both services overridden
    └── logged_in_client: test_client after a successful login
"""

import os
from datetime import datetime, timedelta, timezone
from typing import List, Tuple
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Override settings for testing BEFORE any snippetbox imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["SESSION_BACKEND"] = "memory"
os.environ["SESSION_COOKIE_SECURE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from snippetbox.exceptions import (  # noqa: E402
    DuplicateEmailError,
    InvalidCredentialsError,
    NotFoundError,
)
from snippetbox.models.snippet import Snippet  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Service Doubles
# ══════════════════════════════════════════════════════════════════════════

def make_snippet(snippet_id: int = 1) -> Snippet:
    created = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
    return Snippet(
        id=snippet_id,
        title="An old silent pond",
        content="An old silent pond...",
        created=created,
        expires=datetime.now(timezone.utc) + timedelta(days=365),
    )


class MockSnippetService:
    """Stands in for SnippetService: snippet 1 exists, inserts get id 2."""

    def __init__(self) -> None:
        self.inserted: List[Tuple[str, str, int]] = []

    async def insert(self, title: str, content: str, expires: int) -> int:
        self.inserted.append((title, content, expires))
        return 2

    async def get(self, snippet_id: int) -> Snippet:
        if snippet_id == 1:
            return make_snippet(1)
        raise NotFoundError(resource="snippet", resource_id=str(snippet_id))

    async def latest(self) -> List[Snippet]:
        return [make_snippet(1)]


class MockUserService:
    """
    Stands in for UserService.

    dupe@example.com is already registered; alice@example.com with
    password "pa$$word" authenticates as user 1, the only existing user.
    """

    def __init__(self) -> None:
        self.inserted: List[Tuple[str, str]] = []

    async def insert(self, name: str, email: str, password: str) -> int:
        if email == "dupe@example.com":
            raise DuplicateEmailError(email=email)
        self.inserted.append((name, email))
        return 2

    async def authenticate(self, email: str, password: str) -> int:
        if email == "alice@example.com" and password == "pa$$word":
            return 1
        raise InvalidCredentialsError()

    async def exists(self, user_id: int) -> bool:
        return user_id == 1


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_snippet(mock_db_session):
            result = MagicMock()
            result.scalar_one_or_none.return_value = snippet
            mock_db_session.execute.return_value = result
            assert await SnippetService(mock_db_session).get(1) is snippet
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
def snippet_service():
    return MockSnippetService()


@pytest.fixture
def user_service():
    return MockUserService()


@pytest_asyncio.fixture
async def test_client(snippet_service, user_service, monkeypatch):
    """
    Provides an async HTTP test client for endpoint testing.

    The services are replaced through `app.dependency_overrides` and the
    session manager gets an empty memory store, so no test sees another's
    sessions. Redirects are not followed.

    Usage:
        async def test_home(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    from snippetbox.main import app
    from snippetbox.services.snippet_service import get_snippet_service
    from snippetbox.services.user_service import get_user_service
    from snippetbox.sessions import MemorySessionStore, session_manager

    monkeypatch.setattr(session_manager, "store", MemorySessionStore())
    app.dependency_overrides[get_snippet_service] = lambda: snippet_service
    app.dependency_overrides[get_user_service] = lambda: user_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def logged_in_client(test_client):
    """test_client carrying the session cookie of user 1."""
    response = await test_client.post(
        "/user/login",
        data={"email": "alice@example.com", "password": "pa$$word"},
    )
    assert response.status_code == 303
    return test_client
