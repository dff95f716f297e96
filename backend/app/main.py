"""
PasteBin Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       holding its own PasteStore on app.state.
Who:   Called by uvicorn (uvicorn app.main:app) or the pastebin-server script.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  Req ID → CORS → Logging → Rate Limit               │
    │         → Body Size → GZip                          │
    │                                                     │
    │  Routes:                                            │
    │  POST /api/paste   GET /api/paste/{id}              │
    │  GET /api/raw/{id} GET /health                      │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ NotFound→404 │ TooLarge→413       │
    │  RateLimit→429  │ Internal/unexpected→500           │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log listening address
    Shutdown: log shutdown; pastes are discarded with the process
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.exceptions import (
    InternalError,
    NotFoundError,
    PasteBinError,
    PayloadTooLargeError,
    RateLimitExceededError,
    ValidationError,
)
from app.middleware.body_limit import BodySizeLimitMiddleware
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.rate_limit import RateLimitMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.responses import render_error
from app.routes import health, pastes, raw
from app.services.paste_store import PasteStore

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Server error"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout, so container runtimes capture it.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our own access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("PasteBin Backend %s starting up...", __version__)
    logger.info(
        "Limits: %d chars per paste, %d bytes per request, %d requests per %ds",
        settings.max_content_length,
        settings.max_body_size,
        settings.rate_limit_requests,
        settings.rate_limit_window,
    )
    logger.info("Server running on port %d", settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info(
        "PasteBin Backend shutting down, discarding %d in-memory pastes",
        len(app.state.paste_store),
    )


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        RequestValidationError  → 400 Bad Request (FastAPI's own 422 remapped)
        NotFoundError           → 404 Not Found
        PayloadTooLargeError    → 413 Payload Too Large
        RateLimitExceededError  → 429 Too Many Requests
        InternalError           → 500 Internal Server Error
        PasteBinError (base)    → 500 Internal Server Error
        HTTPException           → its own status (unknown routes, bad methods)
        Exception (fallback)    → 500 Internal Server Error

    Handlers never put stack traces or exception context in the response.
    Responses under /api/raw/ are plain text, all others JSON.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        details = {"field": exc.field} if exc.field else None
        return render_error(request, status_code=400, exc=exc, details=details)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        logger.warning("[%s] Malformed request: %s", request_id_var.get(""), exc.errors())
        return render_error(
            request,
            status_code=400,
            message="Malformed request",
            code=ValidationError.code,
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return render_error(request, status_code=404, exc=exc)

    @app.exception_handler(PayloadTooLargeError)
    async def handle_payload_too_large(request: Request, exc: PayloadTooLargeError):
        logger.warning("[%s] %s", request_id_var.get(""), exc.message)
        return render_error(request, status_code=413, exc=exc, details={"limit": exc.limit})

    @app.exception_handler(RateLimitExceededError)
    async def handle_rate_limit(request: Request, exc: RateLimitExceededError):
        return render_error(
            request,
            status_code=429,
            exc=exc,
            details={"retry_after": exc.retry_after},
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.exception_handler(InternalError)
    async def handle_internal_error(request: Request, exc: InternalError):
        logger.error(
            "[%s] Internal error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return render_error(request, status_code=500, exc=exc, message=GENERIC_ERROR_MESSAGE)

    @app.exception_handler(PasteBinError)
    async def handle_app_error(request: Request, exc: PasteBinError):
        logger.error(
            "[%s] Unhandled application error %s: %s",
            request_id_var.get(""),
            type(exc).__name__,
            exc.message,
        )
        return render_error(request, status_code=500, exc=exc, message=GENERIC_ERROR_MESSAGE)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return render_error(
            request,
            status_code=exc.status_code,
            message=str(exc.detail),
            code="http_error",
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=exc,
        )
        return render_error(
            request,
            status_code=500,
            message=GENERIC_ERROR_MESSAGE,
            code="internal_server_error",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    store: Optional[PasteStore] = None,
    rate_limit_requests: Optional[int] = None,
    rate_limit_window: Optional[int] = None,
    max_body_size: Optional[int] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store:               Paste store to serve (a fresh empty one by default)
        rate_limit_requests: Override settings.rate_limit_requests
        rate_limit_window:   Override settings.rate_limit_window
        max_body_size:       Override settings.max_body_size

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="PasteBin API",
        description=(
            "Minimal pastebin service. Submit text, get a short ID back, "
            "read it later as JSON or raw text. Pastes are kept in memory only."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.paste_store = store if store is not None else PasteStore()
    app.state.max_body_size = (
        max_body_size if max_body_size is not None else settings.max_body_size
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → CORS → Logging → RateLimit → BodySize → GZip
    app.add_middleware(GZipMiddleware, minimum_size=settings.gzip_minimum_size)
    app.add_middleware(BodySizeLimitMiddleware, max_body_size=app.state.max_body_size)
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=rate_limit_requests,
        window_seconds=rate_limit_window,
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(pastes.router)
    app.include_router(raw.router)
    app.include_router(health.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()


def run() -> None:
    """Start the server on the configured host and port."""
    uvicorn.run(
        "app.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
