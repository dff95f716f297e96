"""
PasteBin Backend — Request ID Middleware
==========================================

What:  Assigns a short ID to each incoming request and returns it to the client.
How:   Uses the client's X-Request-ID header when present, otherwise a fresh
       8-character UUID prefix. The ID is stored in a ContextVar for loggers,
       in request.state for error bodies, and echoed in the X-Request-ID
       response header.
When:  Outermost middleware, so responses produced by the rate limiter, the
       body limit and unexpected failures all pass back through it.

Every log line and error body from one request carries the same ID, so a
user reporting an error can be matched to the server logs.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.responses import render_error

logger = logging.getLogger(__name__)

# ── Context Variable ──────────────────────────────────────────────────────
# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Exceptions no handler claimed are turned into the generic 500 here,
    so that response carries the ID as well.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                rid,
                request.method,
                request.url.path,
                exc,
                exc_info=exc,
            )
            response = render_error(
                request,
                status_code=500,
                message="Server error",
                code="internal_server_error",
            )
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
