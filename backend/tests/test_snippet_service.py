"""
Snippetbox — Snippet Service Unit Tests
========================================

How:   Uses the mock DB session from conftest (no real database).

What we test:
    ✅ insert stores a snippet expiring N days out and returns its id
    ✅ get returns the row or raises NotFoundError
    ✅ SQLAlchemy failures surface as DatabaseError
"""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from snippetbox.exceptions import DatabaseError, NotFoundError
from snippetbox.models.snippet import Snippet
from snippetbox.services.snippet_service import SnippetService


def result_with(**attrs):
    result = MagicMock()
    for name, value in attrs.items():
        getattr(result, name).return_value = value
    return result


class TestSnippetServiceInsert:

    @pytest.mark.asyncio
    async def test_insert_returns_new_id(self, mock_db_session):
        added = []

        def add(obj):
            obj.id = 2
            added.append(obj)

        mock_db_session.add.side_effect = add
        service = SnippetService(mock_db_session)

        snippet_id = await service.insert("O snail", "Climb Mount Fuji", 7)

        assert snippet_id == 2
        mock_db_session.flush.assert_awaited_once()
        mock_db_session.commit.assert_awaited_once()
        snippet = added[0]
        assert isinstance(snippet, Snippet)
        assert snippet.title == "O snail"
        assert snippet.expires - snippet.created == timedelta(days=7)

    @pytest.mark.asyncio
    async def test_insert_database_failure(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("connection lost"))
        )
        with pytest.raises(DatabaseError):
            await SnippetService(mock_db_session).insert("t", "c", 1)

    @pytest.mark.asyncio
    async def test_insert_commit_failure(self, mock_db_session):
        mock_db_session.commit = AsyncMock(
            side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error"))
        )
        with pytest.raises(DatabaseError):
            await SnippetService(mock_db_session).insert("O snail", "Climb", 7)


class TestSnippetServiceGet:

    @pytest.mark.asyncio
    async def test_get_found(self, mock_db_session):
        snippet = Snippet(id=1, title="An old silent pond", content="...")
        mock_db_session.execute.return_value = result_with(scalar_one_or_none=snippet)

        assert await SnippetService(mock_db_session).get(1) is snippet

    @pytest.mark.asyncio
    async def test_get_missing_or_expired(self, mock_db_session):
        mock_db_session.execute.return_value = result_with(scalar_one_or_none=None)

        with pytest.raises(NotFoundError):
            await SnippetService(mock_db_session).get(99)

    @pytest.mark.asyncio
    async def test_get_database_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection lost"))
        )
        with pytest.raises(DatabaseError):
            await SnippetService(mock_db_session).get(1)


class TestSnippetServiceLatest:

    @pytest.mark.asyncio
    async def test_latest(self, mock_db_session):
        rows = [Snippet(id=2, title="b", content="b"), Snippet(id=1, title="a", content="a")]
        result = MagicMock()
        result.scalars.return_value.all.return_value = rows
        mock_db_session.execute.return_value = result

        assert await SnippetService(mock_db_session).latest() == rows
