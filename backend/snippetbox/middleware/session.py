"""
Snippetbox — Session Middleware
================================

What:  Loads the session before each request and commits it afterwards.
How:   Delegates to SessionManager.load / SessionManager.commit; the
       per-request SessionState travels on `request.state.session`, which
       BaseHTTPMiddleware shares with the endpoint through the ASGI scope.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from snippetbox.sessions import SessionManager


class SessionMiddleware(BaseHTTPMiddleware):
    # Static assets and health probes never touch the session
    EXCLUDED_PREFIXES = ("/static/", "/health")

    def __init__(self, app: ASGIApp, manager: SessionManager):
        super().__init__(app)
        self.manager = manager

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path.startswith(self.EXCLUDED_PREFIXES):
            return await call_next(request)

        await self.manager.load(request)
        response = await call_next(request)
        await self.manager.commit(request, response)
        return response
