"""
Snippetbox — Sessions Package
==============================

Builds the process-wide SessionManager from settings and exposes it as a
FastAPI dependency.

Usage in a route::

    async def logout(request: Request, sessions: SessionManager = Depends(get_session_manager)):
        sessions.renew_token(request)
        sessions.remove(request, "authenticatedUserID")
"""

from datetime import timedelta

from snippetbox.config import settings
from snippetbox.database import async_session_factory
from snippetbox.sessions.manager import SessionManager, SessionState
from snippetbox.sessions.stores import DatabaseSessionStore, MemorySessionStore, SessionStore

__all__ = [
    "DatabaseSessionStore",
    "MemorySessionStore",
    "SessionManager",
    "SessionState",
    "SessionStore",
    "create_session_store",
    "get_session_manager",
    "session_manager",
]


def create_session_store(backend: str) -> SessionStore:
    """Construct the store named by the SESSION_BACKEND setting."""
    if backend == "memory":
        return MemorySessionStore()
    if backend == "database":
        return DatabaseSessionStore(async_session_factory)
    raise ValueError(f"Unknown session backend '{backend}'")


# ── Singleton Instance ────────────────────────────────────────────────────
session_manager = SessionManager(
    store=create_session_store(settings.session_backend),
    lifetime=timedelta(hours=settings.session_lifetime_hours),
    cookie_name=settings.session_cookie_name,
    cookie_secure=settings.session_cookie_secure,
)


def get_session_manager() -> SessionManager:
    """FastAPI dependency returning the process-wide SessionManager."""
    return session_manager
