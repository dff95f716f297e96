"""
PasteBin Backend — Rate Limiting Middleware
=============================================

What:  Per-IP sliding window rate limiter.
How:   Tracks request timestamps per IP in memory.
Who:   Applied to every request via Starlette middleware.
When:  Ahead of body checks and routes, so abusive clients are rejected early.

Algorithm: Sliding Window Log
    1. Each IP gets a list of request timestamps
    2. On each request, drop timestamps older than the window
    3. If remaining count >= limit, reject with 429
    4. Otherwise, record the current timestamp and let the request through

    Default: 100 requests per 15-minute window.

Limitations:
    State is per process. Running several workers multiplies the effective
    limit by the worker count.
"""

import logging
import time
from collections import defaultdict
from typing import Callable, Dict, List, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.exceptions import RateLimitExceededError
from app.responses import render_error

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window rate limiter.

    Args:
        max_requests:   Requests allowed per window (default: settings.rate_limit_requests)
        window_seconds: Window length in seconds (default: settings.rate_limit_window)
        clock:          Time source, replaceable in tests

    Excluded paths:
        - /health: Health checks should never be rate-limited
        - /docs, /openapi.json, /redoc: API documentation stays reachable

    Thread Safety:
        Safe for single-process async (uvicorn). Not shared across workers.
    """

    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    # Inactive IPs are swept after this many recorded requests
    CLEANUP_EVERY = 1000

    def __init__(
        self,
        app,
        max_requests: Optional[int] = None,
        window_seconds: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(app)
        self.max_requests = (
            settings.rate_limit_requests if max_requests is None else max_requests
        )
        self.window_seconds = (
            settings.rate_limit_window if window_seconds is None else window_seconds
        )
        self._clock = clock
        self._requests: Dict[str, List[float]] = defaultdict(list)
        self._since_cleanup = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        # Caveat: Behind a proxy, this is the proxy's IP
        client_ip = request.client.host if request.client else "unknown"

        now = self._clock()
        window_start = now - self.window_seconds

        # ── Sliding Window: Clean old entries ─────────────────────────────
        timestamps = [ts for ts in self._requests[client_ip] if ts > window_start]
        self._requests[client_ip] = timestamps

        # ── Check rate limit ──────────────────────────────────────────────
        if len(timestamps) >= self.max_requests:
            oldest = timestamps[0] if timestamps else now
            retry_after = int(oldest + self.window_seconds - now) + 1

            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip,
                len(timestamps),
                self.window_seconds,
            )
            exc = RateLimitExceededError(retry_after=retry_after)
            return render_error(
                request,
                status_code=429,
                exc=exc,
                details=exc.context,
                headers={"Retry-After": str(retry_after)},
            )

        # ── Record this request ───────────────────────────────────────────
        timestamps.append(now)

        self._since_cleanup += 1
        if self._since_cleanup >= self.CLEANUP_EVERY:
            self._since_cleanup = 0
            self._cleanup_inactive_ips(window_start)

        return await call_next(request)

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        """Remove IPs that have no requests within the current window."""
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] <= window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]

        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
