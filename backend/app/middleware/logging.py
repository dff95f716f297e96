"""
PasteBin Backend — Access Log Middleware
==========================================

What:  One access log line per paste API request.
How:   Times call_next and logs to `pastebin.access`. The path is mapped to
       a route kind (create / view / raw) and, for reads, the paste id, so
       log searches can follow one paste across requests.
When:  Inside RequestIDMiddleware, so the request ID is already set.

A request that raises instead of returning is logged as a 500 before the
exception continues up to RequestIDMiddleware.

What we log vs what we DON'T log:
    Log: method, route kind, paste id, status, duration, IP, request ID
    Don't log: request or response bodies (paste content)
"""

import logging
import re
import time
from typing import Optional, Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("pastebin.access")

_PASTE_PATH = re.compile(r"^/api/(?P<kind>paste|raw)/(?P<paste_id>[^/]+)$")

# Path segment → route kind
_READ_KINDS = {"paste": "view", "raw": "raw"}


def classify_path(path: str) -> Tuple[str, Optional[str]]:
    """
    Map a request path to (route kind, paste id).

    >>> classify_path("/api/raw/1a2b3c4d")
    ('raw', '1a2b3c4d')
    >>> classify_path("/api/paste")
    ('create', None)
    """
    if path == "/api/paste":
        return "create", None
    match = _PASTE_PATH.match(path)
    if match:
        return _READ_KINDS[match.group("kind")], match.group("paste_id")
    return "other", None


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Access logger for paste traffic.

    Level by status:
        5xx → ERROR
        4xx → WARNING
        2xx/3xx → INFO

    Health checks are not logged.
    """

    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.SKIPPED_PATHS:
            return await call_next(request)

        route, paste_id = classify_path(path)
        started = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            self._log(request, route, paste_id, status, started)

    @staticmethod
    def _log(
        request: Request,
        route: str,
        paste_id: Optional[str],
        status: int,
        started: float,
    ) -> None:
        duration_ms = (time.perf_counter() - started) * 1000
        rid = request_id_var.get("")
        client_ip = request.client.host if request.client else "unknown"

        logger.log(
            level_for_status(status),
            "%s %s paste=%s -> %d %.1fms [%s] from %s",
            request.method,
            route,
            paste_id or "-",
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "route": route,
                "paste_id": paste_id,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
