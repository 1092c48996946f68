"""
Augmented Canvas Backend — Request ID Middleware
=================================================

What:  Assigns a short correlation ID to each request and echoes it back in
       the X-Request-ID response header.
Why:   Error bodies carry `request_id`, so a user reporting "Error: ..." from
       the canvas can be matched to the backend log line for that call.
How:   Reuses a client-sent X-Request-ID when present; otherwise generates
       one. The ID is stored in a ContextVar so route helpers and loggers can
       tag their output, and in request.state for handlers.
Who:   Applied to every request via Starlette middleware.
When:  Outermost middleware (runs before the access log and the routes).
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID.
# threading.local would be shared by every request on the loop thread.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an ID used in error bodies and log lines.

    Behavior:
        1. Use the client's X-Request-ID header when it is non-empty
        2. Otherwise generate a new 8-character ID
        3. Store it in the ContextVar and in request.state
        4. Echo it in the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars are enough to correlate one local user's requests
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        # ContextVar for loggers and deps.classified_error_response,
        # request.state for handlers that take the Request directly
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
