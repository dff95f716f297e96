"""
PasteBin Backend — Custom Exception Hierarchy
===============================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return error responses with the matching HTTP status code.
Who:   Raised by the paste store, routes, and middleware; caught by global handlers.
When:  During request processing when recoverable errors occur.

Exception Hierarchy:
    PasteBinError (base)
    ├── ValidationError            → 400 Bad Request (client can fix)
    ├── NotFoundError              → 404 Not Found
    ├── PayloadTooLargeError       → 413 Payload Too Large
    ├── RateLimitExceededError     → 429 Too Many Requests
    └── InternalError              → 500 Internal Server Error
        └── IdentifierExhaustedError
"""

from typing import Any, Dict, Optional


class PasteBinError(Exception):
    """
    Base exception for all PasteBin application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
        code:     Machine-readable error code used in JSON error bodies
    """

    code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PasteBinError):
    """
    Raised when client input fails validation.

    When:    Content missing, empty, not text, or over the size limit;
             request body that can't be parsed into a paste submission.
    HTTP:    400 Bad Request
    """

    code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(PasteBinError):
    """
    Raised when a requested paste does not exist.

    When:    GET /api/paste/{id} or GET /api/raw/{id} with an unknown id.
    HTTP:    404 Not Found

    The store raises this instead of returning None so route handlers
    stay free of status-code logic.
    """

    code = "not_found"

    def __init__(
        self,
        resource: str = "Paste",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource_id = resource_id


class PayloadTooLargeError(PasteBinError):
    """
    Raised when a request body is larger than the configured limit.

    HTTP:    413 Payload Too Large
    """

    code = "payload_too_large"

    def __init__(
        self,
        limit: int,
        received: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["limit"] = limit
        if received is not None:
            ctx["received"] = received
        super().__init__(
            message=f"Request body exceeds the {limit} byte limit",
            context=ctx,
        )
        self.limit = limit


class RateLimitExceededError(PasteBinError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    When:    After rate_limit_requests (default: 100) in rate_limit_window
             (default: 15 minutes).
    HTTP:    429 Too Many Requests

    Response includes:
        - retry_after: Seconds until the oldest request leaves the window
        - Retry-After header for HTTP-compliant clients
    """

    code = "rate_limit_exceeded"

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Too many requests. Please wait {retry_after} seconds before retrying."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class InternalError(PasteBinError):
    """
    Raised when the service fails for reasons the client can't fix.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; context is
    logged server-side only.
    """

    code = "server_error"

    def __init__(
        self,
        message: str = "Server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class IdentifierExhaustedError(InternalError):
    """
    Raised when the store can't draw an unused paste id.

    When:    Every candidate in id_max_attempts draws collided with a live paste.
             At the default 32 bits of id space this means the store is
             close to saturated.
    """

    def __init__(self, attempts: int, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["attempts"] = attempts
        super().__init__(
            message=f"Could not allocate a unique paste id after {attempts} attempts",
            context=ctx,
        )
        self.attempts = attempts
