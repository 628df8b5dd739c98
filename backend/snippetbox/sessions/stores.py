"""
Snippetbox — Session Stores
============================

What:  Where session values live between requests, keyed by opaque token.
How:   `SessionStore` is the abstract contract; two implementations:

    MemorySessionStore    process-local dict (development, tests, one worker)
    DatabaseSessionStore  `sessions` table via async SQLAlchemy (production)

Values are stored JSON-encoded in both, so what comes back from `find` is
always a fresh dict of JSON types and never aliases a live request's state.
"""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from snippetbox.models.session import SessionRecord

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything stored here is UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SessionStore(ABC):
    """
    Contract for session persistence.

    Implementations must treat an expired entry exactly like a missing one.
    """

    @abstractmethod
    async def find(self, token: str) -> Optional[Dict[str, Any]]:
        """Return the values stored under `token`, or None if absent/expired."""
        ...

    @abstractmethod
    async def commit(self, token: str, values: Dict[str, Any], expiry: datetime) -> None:
        """Insert or replace the values stored under `token`."""
        ...

    @abstractmethod
    async def delete(self, token: str) -> None:
        """Remove `token`; a no-op if it is not present."""
        ...

    @abstractmethod
    async def delete_expired(self) -> int:
        """Purge expired entries and return how many were removed."""
        ...


class MemorySessionStore(SessionStore):
    def __init__(self) -> None:
        self._items: Dict[str, Tuple[str, datetime]] = {}

    async def find(self, token: str) -> Optional[Dict[str, Any]]:
        item = self._items.get(token)
        if item is None:
            return None
        data, expiry = item
        if expiry <= datetime.now(timezone.utc):
            del self._items[token]
            return None
        return json.loads(data)

    async def commit(self, token: str, values: Dict[str, Any], expiry: datetime) -> None:
        self._items[token] = (json.dumps(values), _as_utc(expiry))

    async def delete(self, token: str) -> None:
        self._items.pop(token, None)

    async def delete_expired(self) -> int:
        now = datetime.now(timezone.utc)
        expired = [token for token, (_, expiry) in self._items.items() if expiry <= now]
        for token in expired:
            del self._items[token]
        return len(expired)

    def __len__(self) -> int:
        return len(self._items)


class DatabaseSessionStore(SessionStore):
    """
    Session rows in the `sessions` table.

    Each operation opens its own short-lived AsyncSession from the factory,
    independent of the request's `get_db_session` transaction, so a failed
    handler rollback never discards session changes (and vice versa).
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def find(self, token: str) -> Optional[Dict[str, Any]]:
        async with self.session_factory() as db:
            record = await db.get(SessionRecord, token)
            if record is None:
                return None
            if _as_utc(record.expiry) <= datetime.now(timezone.utc):
                return None
            return json.loads(record.data)

    async def commit(self, token: str, values: Dict[str, Any], expiry: datetime) -> None:
        async with self.session_factory() as db:
            await db.merge(
                SessionRecord(token=token, data=json.dumps(values), expiry=_as_utc(expiry))
            )
            await db.commit()

    async def delete(self, token: str) -> None:
        async with self.session_factory() as db:
            await db.execute(delete(SessionRecord).where(SessionRecord.token == token))
            await db.commit()

    async def delete_expired(self) -> int:
        async with self.session_factory() as db:
            result = await db.execute(
                delete(SessionRecord).where(SessionRecord.expiry <= datetime.now(timezone.utc))
            )
            await db.commit()
            return result.rowcount or 0
