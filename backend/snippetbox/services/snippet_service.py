"""
Snippetbox — Snippet Service
=============================

What:  Persistence operations for snippets: insert, get, latest.
How:   Wraps one request-scoped AsyncSession; SQLAlchemy failures are
       translated into DatabaseError so routes never see driver exceptions.
Who:   Injected into the snippet routes via `get_snippet_service`.

Visibility rule:
    A snippet is only returned while `expires` is in the future; expired
    rows behave exactly like missing ones (404 on view, absent from home).
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List

from fastapi import Depends
from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.database import get_db_session
from snippetbox.exceptions import DatabaseError, NotFoundError
from snippetbox.models.snippet import Snippet

logger = logging.getLogger(__name__)

LATEST_LIMIT = 10


class SnippetService:
    """
    Snippet persistence bound to one database session.

    Writes commit before returning, so a redirect is only sent for a row that
    is durably stored. Reads leave the transaction to `get_db_session`.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, title: str, content: str, expires: int) -> int:
        """
        Store a new snippet that expires `expires` days from now.

        Returns:
            The new snippet's id (assigned by the flush).

        Raises:
            DatabaseError: The insert failed.
        """
        now = datetime.now(timezone.utc)
        snippet = Snippet(
            title=title,
            content=content,
            created=now,
            expires=now + timedelta(days=expires),
        )
        try:
            self.db.add(snippet)
            await self.db.flush()
            await self.db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error inserting snippet: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the snippet. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Snippet %s created (expires in %d days)", snippet.id, expires)
        return snippet.id

    async def get(self, snippet_id: int) -> Snippet:
        """
        Fetch one unexpired snippet.

        Raises:
            NotFoundError: No unexpired snippet has this id (→ 404).
            DatabaseError: Query execution failed (→ 500).
        """
        now = datetime.now(timezone.utc)
        try:
            result = await self.db.execute(
                select(Snippet).where(Snippet.id == snippet_id, Snippet.expires > now)
            )
            snippet = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching snippet %s: %s", snippet_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the snippet. Please try again.",
                context={"snippet_id": snippet_id},
            )

        if snippet is None:
            raise NotFoundError(resource="snippet", resource_id=str(snippet_id))
        return snippet

    async def latest(self) -> List[Snippet]:
        """The most recently created unexpired snippets, newest first."""
        now = datetime.now(timezone.utc)
        query = (
            select(Snippet)
            .where(Snippet.expires > now)
            .order_by(desc(Snippet.created), desc(Snippet.id))
            .limit(LATEST_LIMIT)
        )
        try:
            result = await self.db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing snippets: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve snippets. Please try again.",
                context={"error_type": type(e).__name__},
            )


def get_snippet_service(db: AsyncSession = Depends(get_db_session)) -> SnippetService:
    """FastAPI dependency; tests replace it through `app.dependency_overrides`."""
    return SnippetService(db)
