"""
PasteBin Backend — Error Response Rendering
=============================================

What:  Builds the HTTP response for an error, shared by the exception
       handlers in main.py and by middleware that short-circuits requests.
How:   Raw-content routes (/api/raw/...) get a plain-text body holding just
       the message; every other path gets the JSON error body:

           {"error": <message>, "code": <code>, "request_id": <id>, "details": {...}}

       `details` is only present when the caller passes it. Internal
       context from exceptions is never copied in implicitly. The request
       ID is read from request.state, where RequestIDMiddleware puts it.
"""

from typing import Any, Dict, Optional

from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response

from app.exceptions import PasteBinError

RAW_PATH_PREFIX = "/api/raw/"


def wants_plain_text(request: Request) -> bool:
    return request.url.path.startswith(RAW_PATH_PREFIX)


def render_error(
    request: Request,
    status_code: int,
    exc: Optional[PasteBinError] = None,
    message: Optional[str] = None,
    code: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    """
    Render an error response for `request`.

    `message` and `code` override the ones carried by `exc`.
    """
    if message is None:
        message = exc.message if exc is not None else "Server error"
    if code is None:
        code = exc.code if exc is not None else "server_error"

    if wants_plain_text(request):
        return PlainTextResponse(
            message,
            status_code=status_code,
            headers=headers,
            media_type="text/plain; charset=utf-8",
        )

    content: Dict[str, Any] = {
        "error": message,
        "code": code,
        "request_id": getattr(request.state, "request_id", ""),
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)
