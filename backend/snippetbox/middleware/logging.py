"""
Snippetbox — Request Logging Middleware
========================================

What:  One access-log line per request on the `snippetbox.access` logger.
How:   Measures wall time around the downstream app and logs method, path,
       status, duration, request id and client IP. Redirects also log their
       target, so a POST → 303 → GET sequence reads naturally in the log.

Levels:
    5xx → ERROR, 4xx → WARNING (422 re-renders included), otherwise INFO

Not logged: request bodies (passwords, snippet content), cookies (session
tokens) and query strings.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from snippetbox.middleware.request_id import request_id_var

logger = logging.getLogger("snippetbox.access")


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    # Too frequent to be useful in the access log
    QUIET_PREFIXES = ("/health", "/static/")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path.startswith(self.QUIET_PREFIXES):
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        status = response.status_code
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        message = "%s %s %d %.1fms [%s] from %s"
        args = [request.method, path, status, duration_ms, rid, client_ip]
        location = response.headers.get("location")
        if location and 300 <= status < 400:
            message += " -> %s"
            args.append(location)

        logger.log(
            level_for_status(status),
            message,
            *args,
            extra={
                "request_id": rid,
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
