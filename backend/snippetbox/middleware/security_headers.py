"""
Snippetbox — Security Headers Middleware
=========================================

What:  Adds browser hardening headers to every response.
How:   Sets the headers after the handler ran; protected pages additionally
       get `Cache-Control: no-store` when the authentication dependency
       flagged the request (`request.state.no_store`).

Headers:
    Content-Security-Policy   only same-origin resources, plus Google Fonts
    Referrer-Policy           origin-only on cross-origin navigation
    X-Content-Type-Options    no MIME sniffing
    X-Frame-Options           no framing (clickjacking)
    X-XSS-Protection          0; legacy filter disabled in favour of CSP
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

SECURITY_HEADERS = {
    "Content-Security-Policy": (
        "default-src 'self'; style-src 'self' fonts.googleapis.com; font-src fonts.gstatic.com"
    ),
    "Referrer-Policy": "origin-when-cross-origin",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "deny",
    "X-XSS-Protection": "0",
}


class SecureHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)

        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value

        if getattr(request.state, "no_store", False):
            response.headers["Cache-Control"] = "no-store"

        return response
