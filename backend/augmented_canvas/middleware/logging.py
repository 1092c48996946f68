"""
Augmented Canvas Backend — Request Logging Middleware
======================================================

What:  One access-log line per request: method, path, status, duration,
       request ID, client address.
Why:   The plugin shows only "Error: ..." to the user; the access line with the
       same request ID is where a failing call is found afterwards.
How:   Times the downstream call and picks the level from the status code
       (5xx ERROR, 4xx WARNING, else INFO). /health is not logged.

What we log vs what we DON'T log:
    ✅ Log: method, path, status, duration, request ID, client address
    ❌ Don't log: request bodies (private note content), the X-OpenAI-Key header
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from augmented_canvas.middleware.request_id import request_id_var

logger = logging.getLogger("augmented_canvas.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs structured information about each HTTP request and response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path == "/health":
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = request_id_var.get("")

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
