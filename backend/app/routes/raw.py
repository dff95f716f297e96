"""
PasteBin Backend — Raw Paste Route
====================================

What:  Handles GET /api/raw/{id}, returning the bare paste text.
Who:   curl users, embeds, and scripts that want the content without JSON.

Raw reads do not count as views. Errors on this route are rendered as
plain text by the global handlers (see main.py), not as JSON.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from app.dependencies import get_paste_store
from app.services.paste_store import PasteStore

router = APIRouter(prefix="/api", tags=["Raw"])


@router.get(
    "/raw/{paste_id}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Paste content", "content": {"text/plain": {}}},
        404: {"description": "Paste not found", "content": {"text/plain": {}}},
    },
    summary="Get raw paste content",
)
async def get_raw_paste(
    paste_id: str,
    store: PasteStore = Depends(get_paste_store),
) -> PlainTextResponse:
    content = store.get_raw(paste_id)
    return PlainTextResponse(content, media_type="text/plain; charset=utf-8")
