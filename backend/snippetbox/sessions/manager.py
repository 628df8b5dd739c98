"""
Snippetbox — Session Manager
=============================

What:  The session capability handed to route handlers: put / get /
       pop_string / remove / renew_token, scoped to the current request.
How:   SessionMiddleware calls `load()` before the handler (cookie token →
       store lookup → `request.state.session`) and `commit()` after it
       (write back to the store and set the cookie, only if something
       changed). Handler-facing methods are synchronous and in-memory.
Who:   Injected with `Depends(get_session_manager)`; tests patch or wrap
       the singleton to observe calls.

Token lifecycle:
    no cookie / unknown / expired token → new empty session, no token yet
    first modification                  → token issued at commit
    renew_token()                       → new token issued, old one deleted
                                          from the store at commit
"""

import asyncio
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from starlette.requests import Request
from starlette.responses import Response

from snippetbox.sessions.stores import SessionStore

logger = logging.getLogger(__name__)


def generate_token() -> str:
    return secrets.token_urlsafe(32)


class SessionState:
    """Per-request session data; lives on `request.state.session`."""

    def __init__(self, token: Optional[str] = None, values: Optional[Dict[str, Any]] = None):
        self.token = token
        self.values: Dict[str, Any] = values or {}
        self.modified = False
        # Tokens replaced by renew_token(), deleted from the store at commit
        self.stale_tokens: List[str] = []

    def __repr__(self) -> str:
        return f"<SessionState(keys={sorted(self.values)}, modified={self.modified})>"


class SessionManager:
    """
    Request-scoped access to a shared SessionStore.

    Args:
        store: Backing SessionStore.
        lifetime: How long a committed session stays valid.
        cookie_name: Name of the cookie carrying the token.
        cookie_secure: Set the Secure attribute (requires HTTPS).
    """

    def __init__(
        self,
        store: SessionStore,
        lifetime: timedelta = timedelta(hours=12),
        cookie_name: str = "session",
        cookie_secure: bool = True,
    ):
        self.store = store
        self.lifetime = lifetime
        self.cookie_name = cookie_name
        self.cookie_secure = cookie_secure

    # ── Middleware hooks ──────────────────────────────────────────────────

    async def load(self, request: Request) -> SessionState:
        token = request.cookies.get(self.cookie_name)
        values = await self.store.find(token) if token else None

        if values is None:
            state = SessionState()
        else:
            state = SessionState(token=token, values=values)

        request.state.session = state
        return state

    async def commit(self, request: Request, response: Response) -> None:
        state = getattr(request.state, "session", None)
        if state is None or not state.modified:
            return

        for token in state.stale_tokens:
            await self.store.delete(token)
        state.stale_tokens.clear()

        if state.token is None:
            state.token = generate_token()

        expiry = datetime.now(timezone.utc) + self.lifetime
        await self.store.commit(state.token, state.values, expiry)

        response.set_cookie(
            key=self.cookie_name,
            value=state.token,
            max_age=int(self.lifetime.total_seconds()),
            path="/",
            secure=self.cookie_secure,
            httponly=True,
            samesite="lax",
        )
        state.modified = False

    # ── Handler-facing operations ─────────────────────────────────────────

    def _state(self, request: Request) -> SessionState:
        state = getattr(request.state, "session", None)
        if state is None:
            raise RuntimeError(
                "No session loaded for this request. "
                "Ensure SessionMiddleware is added to the app."
            )
        return state

    def put(self, request: Request, key: str, value: Any) -> None:
        state = self._state(request)
        state.values[key] = value
        state.modified = True

    def get(self, request: Request, key: str, default: Any = None) -> Any:
        return self._state(request).values.get(key, default)

    def get_int(self, request: Request, key: str) -> int:
        """The integer stored under `key`, or 0 if absent or not an integer."""
        value = self.get(request, key)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return 0

    def exists(self, request: Request, key: str) -> bool:
        return key in self._state(request).values

    def pop_string(self, request: Request, key: str) -> str:
        """
        Remove `key` and return its value if it was a string.

        Returns "" when the key is absent or held a non-string value; the
        key is removed either way.
        """
        state = self._state(request)
        if key not in state.values:
            return ""
        value = state.values.pop(key)
        state.modified = True
        return value if isinstance(value, str) else ""

    def remove(self, request: Request, key: str) -> None:
        state = self._state(request)
        if key in state.values:
            del state.values[key]
            state.modified = True

    def renew_token(self, request: Request) -> None:
        """
        Issue a new token for the current session data.

        Called on every privilege change (login, logout) against session
        fixation. The old token stops working once the response is committed.
        """
        state = self._state(request)
        if state.token is not None:
            state.stale_tokens.append(state.token)
        state.token = generate_token()
        state.modified = True

    # ── Maintenance ───────────────────────────────────────────────────────

    async def run_cleanup(self, interval: float) -> None:
        """
        Purge expired sessions every `interval` seconds until cancelled.

        Started as a background task from the application lifespan.
        """
        while True:
            await asyncio.sleep(interval)
            try:
                removed = await self.store.delete_expired()
            except Exception as e:
                logger.error("Session cleanup failed: %s", str(e), exc_info=True)
                continue
            if removed:
                logger.debug("Purged %d expired sessions", removed)
