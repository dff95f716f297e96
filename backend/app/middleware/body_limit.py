"""
PasteBin Backend — Request Body Size Middleware
=================================================

What:  Rejects requests whose declared body is larger than max_body_size.
How:   Compares the Content-Length header against the limit before the body
       is read. Requests without the header (chunked uploads) pass through;
       the create-paste route counts their bytes as they stream in.
When:  Right after rate limiting, before any route runs.
"""

import logging
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.exceptions import PayloadTooLargeError, ValidationError
from app.responses import render_error

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Content-Length based body limit.

    Args:
        max_body_size: Largest accepted body in bytes (default: settings.max_body_size)
    """

    def __init__(self, app, max_body_size: Optional[int] = None):
        super().__init__(app)
        self.max_body_size = (
            settings.max_body_size if max_body_size is None else max_body_size
        )

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        declared = request.headers.get("content-length")
        if declared is None:
            return await call_next(request)

        try:
            length = int(declared)
        except ValueError:
            return render_error(
                request,
                status_code=400,
                exc=ValidationError(message="Invalid Content-Length header"),
            )

        if length > self.max_body_size:
            logger.warning(
                "Rejected %s %s: body of %d bytes exceeds %d byte limit",
                request.method,
                request.url.path,
                length,
                self.max_body_size,
            )
            exc = PayloadTooLargeError(limit=self.max_body_size, received=length)
            return render_error(
                request,
                status_code=413,
                exc=exc,
                details={"limit": self.max_body_size},
            )

        return await call_next(request)
