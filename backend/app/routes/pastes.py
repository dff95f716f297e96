"""
PasteBin Backend — Paste Route Handlers
=========================================

What:  Handles POST /api/paste (create) and GET /api/paste/{id} (fetch).
How:   Reads the submission, delegates to PasteStore, returns JSON.
Who:   Called by the web client and by scripts posting pastes.

Submissions are accepted as JSON or as HTML form data
(application/x-www-form-urlencoded or multipart/form-data).

Error responses (handled by global exception handlers):
    HTTP 400: Content missing/empty/too long, or unreadable body (ValidationError)
    HTTP 404: Unknown paste id (NotFoundError)
    HTTP 413: Body over the configured size limit (PayloadTooLargeError)
    HTTP 500: Anything unexpected
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError as SchemaValidationError
from starlette.types import Message, Receive

from app.dependencies import get_paste_store
from app.exceptions import PayloadTooLargeError, ValidationError
from app.schemas.paste import (
    CreatePasteRequest,
    CreatePasteResponse,
    ErrorResponse,
    PasteResponse,
)
from app.services.paste_store import CONTENT_ERROR_MESSAGE, PasteStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Pastes"])

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_body(request: Request, limit: int) -> bytes:
    """
    Read the request body, failing as soon as more than `limit` bytes arrive.

    BodySizeLimitMiddleware already rejects oversized Content-Length values;
    this covers chunked uploads that declare no length.
    """
    received = 0
    chunks = []
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            raise PayloadTooLargeError(limit=limit, received=received)
        chunks.append(chunk)
    return b"".join(chunks)


def _replay(body: bytes) -> Receive:
    async def receive() -> Message:
        return {"type": "http.request", "body": body, "more_body": False}

    return receive


async def read_submission(request: Request) -> CreatePasteRequest:
    """
    Parse the create-paste body into a CreatePasteRequest.

    An empty body is treated as an empty submission so that it fails the
    store's content check with the usual 400, not a decode error.
    """
    body = await read_body(request, request.app.state.max_body_size)
    request = Request(request.scope, receive=_replay(body))

    content_type = request.headers.get("content-type", "").lower()
    payload: Any
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        payload = {key: value for key, value in form.items()}
    elif not body.strip():
        payload = {}
    else:
        try:
            payload = await request.json()
        except ValueError:
            raise ValidationError(message="Request body is not valid JSON")

    if not isinstance(payload, dict):
        raise ValidationError(message="Request body must be an object")

    try:
        return CreatePasteRequest.model_validate(payload)
    except SchemaValidationError as e:
        raise ValidationError(**_describe_schema_error(e))


def _describe_schema_error(error: SchemaValidationError) -> Dict[str, Any]:
    first = error.errors()[0]
    field = str(first["loc"][0]) if first.get("loc") else None
    if field == "content":
        message = CONTENT_ERROR_MESSAGE
    else:
        message = f"'{field}' must be a string"
    return {
        "message": message,
        "field": field,
        "context": {"reason": first.get("type", "invalid")},
    }


@router.post(
    "/paste",
    response_model=CreatePasteResponse,
    responses={
        200: {"description": "Paste created", "model": CreatePasteResponse},
        400: {"description": "Content missing or too large", "model": ErrorResponse},
        413: {"description": "Request body too large", "model": ErrorResponse},
        429: {"description": "Rate limit exceeded", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a paste",
    description=(
        "Stores a new paste and returns its identifier and relative URL. "
        "Content is required and limited to 50,000 characters; titles are "
        "truncated to 100 characters."
    ),
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": CreatePasteRequest.model_json_schema()},
                "application/x-www-form-urlencoded": {
                    "schema": CreatePasteRequest.model_json_schema()
                },
            },
        }
    },
)
async def create_paste(
    request: Request,
    store: PasteStore = Depends(get_paste_store),
) -> CreatePasteResponse:
    """Create a paste from a JSON or form submission."""
    submission = await read_submission(request)
    paste_id, _ = store.create(
        content=submission.content,
        language=submission.language,
        title=submission.title,
    )
    return CreatePasteResponse(id=paste_id, url=f"/{paste_id}")


@router.get(
    "/paste/{paste_id}",
    response_model=PasteResponse,
    responses={
        200: {"description": "Full paste record", "model": PasteResponse},
        404: {"description": "Paste not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a paste by ID",
    description="Returns the full paste record. Each call counts as one view.",
)
async def get_paste(
    paste_id: str,
    store: PasteStore = Depends(get_paste_store),
) -> PasteResponse:
    """Fetch a paste and record the view."""
    paste = store.get_for_view(paste_id)
    return PasteResponse.from_paste(paste)
