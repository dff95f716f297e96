"""
PasteBin Backend — Pydantic Request/Response Schemas
======================================================

What:  Pydantic models defining the API contract.
How:   FastAPI uses these models to serialize responses and generate the
       OpenAPI docs; the create route validates submissions against
       CreatePasteRequest whether they arrive as JSON or form data.

Field names on the wire follow the existing client contract, so the
creation timestamp is exposed as `createdAt`.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.models.paste import Paste


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What clients send
# ══════════════════════════════════════════════════════════════════════════


class CreatePasteRequest(BaseModel):
    """
    Body of POST /api/paste.

    `content` is optional in the schema. A missing or empty value is
    rejected by the store with the same 400 as an oversized one.
    """
    content: Optional[str] = Field(default=None, description="Paste text (1 to 50,000 characters)")
    language: Optional[str] = Field(default=None, description="Language label, defaults to 'plaintext'")
    title: Optional[str] = Field(default=None, description="Title, truncated to 100 characters")

    model_config = {"extra": "ignore"}


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class CreatePasteResponse(BaseModel):
    """Returned by POST /api/paste on success."""
    id: str = Field(description="Identifier of the new paste")
    url: str = Field(description="Relative URL of the paste, '/' + id")


class PasteResponse(BaseModel):
    """
    Full representation of a paste.
    Returned by GET /api/paste/{id}, with the view that request just counted.
    """
    id: str = Field(description="Paste identifier")
    content: str = Field(description="Paste text")
    language: str = Field(description="Language label")
    title: str = Field(description="Paste title (may be empty)")
    created_at: datetime = Field(
        alias="createdAt",
        description="When the paste was created (UTC ISO 8601)",
    )
    views: int = Field(ge=0, description="Full-record retrievals including this one")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_paste(cls, paste: Paste) -> "PasteResponse":
        return cls(
            id=paste.id,
            content=paste.content,
            language=paste.language,
            title=paste.title,
            created_at=paste.created_at,
            views=paste.views,
        )


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models — Consistent error format across all endpoints
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized JSON error body.

    Example:
        {
            "error": "Paste not found",
            "code": "not_found",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Human-readable error description")
    code: str = Field(description="Machine-readable error code")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    pastes: int = Field(description="Number of pastes currently held in memory")
    uptime_seconds: float = Field(description="Seconds since service started")
