"""
Snippetbox — FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (`snippetbox.main:app`) and by `python -m snippetbox`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌────────┐ ┌─────────┐ ┌──────┐ ┌───────┐ ┌──────┐ │
    │  │ Req ID │→│ Logging │→│ GZip │→│Headers│→│Sessn │ │
    │  └────────┘ └─────────┘ └──────┘ └───────┘ └──────┘ │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │ / + /snippet │ │ /user/...    │ │ /health     │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌────────────────────────────────────────────────┐ │
    │  │ Decode→400 │ NotFound→404 │ Auth→303 │ DB→500  │ │
    │  └────────────────────────────────────────────────┘ │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → configuration warnings → session cleanup task
    Shutdown: cancel cleanup task → dispose database engine
"""

import asyncio
import contextlib
import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from snippetbox import __version__
from snippetbox.config import settings
from snippetbox.database import dispose_engine
from snippetbox.exceptions import (
    AuthenticationRequired,
    DatabaseError,
    DecodeError,
    NotFoundError,
)
from snippetbox.middleware.logging import RequestLoggingMiddleware
from snippetbox.middleware.request_id import RequestIDMiddleware, request_id_var
from snippetbox.middleware.security_headers import SecureHeadersMiddleware
from snippetbox.middleware.session import SessionMiddleware
from snippetbox.routes import health, snippets, users
from snippetbox.sessions import session_manager
from snippetbox.templating import STATIC_DIR

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] snippetbox.access: GET / 200 3.1ms [a1b2c3d4] from 127.0.0.1
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Snippetbox %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Not fatal: development runs without TLS on the memory backend
        logger.warning("%s", str(e))

    cleanup_task = asyncio.create_task(
        session_manager.run_cleanup(settings.session_cleanup_interval)
    )
    logger.info(
        "Sessions: %s backend, %dh lifetime",
        settings.session_backend,
        settings.session_lifetime_hours,
    )
    scheme = "https" if settings.tls_enabled else "http"
    logger.info("Server ready at %s://%s:%d", scheme, settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Snippetbox shutting down...")
    cleanup_task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await cleanup_task
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to responses.

    Handler hierarchy:
        DecodeError             → 400 "Bad Request"
        NotFoundError           → 404 "Not Found"
        AuthenticationRequired  → 303 to /user/login
        DatabaseError           → 500 "Internal Server Error"
        HTTPException (routing) → its own status, plain text
        Exception (fallback)    → 500 "Internal Server Error"

    Bodies are the bare status text; details go to the server log only.
    """

    @app.exception_handler(DecodeError)
    async def handle_decode_error(request: Request, exc: DecodeError):
        rid = request_id_var.get("")
        logger.warning("[%s] Decode error: %s | Context: %s", rid, exc.message, exc.context)
        return PlainTextResponse("Bad Request", status_code=400)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return PlainTextResponse("Not Found", status_code=404)

    @app.exception_handler(AuthenticationRequired)
    async def handle_authentication_required(request: Request, exc: AuthenticationRequired):
        return RedirectResponse(
            "/user/login",
            status_code=303,
            headers={"Cache-Control": "no-store"},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return PlainTextResponse("Internal Server Error", status_code=500)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return PlainTextResponse(
            str(exc.detail),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return PlainTextResponse("Internal Server Error", status_code=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Snippetbox",
        description="Paste and share short text snippets.",
        version=__version__,
        docs_url="/docs",
        redoc_url=None,
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute; see middleware/__init__.py for the chain.
    app.add_middleware(SessionMiddleware, manager=session_manager)
    app.add_middleware(SecureHeadersMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(snippets.router)
    app.include_router(users.router)
    app.include_router(health.router)
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    return app


app = create_app()
