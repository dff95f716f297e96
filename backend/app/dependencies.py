"""
PasteBin Backend — Request Dependencies
=========================================

What:  FastAPI dependencies shared by route handlers.
How:   The paste store is built once by create_app() and parked on
       app.state; routes receive it through Depends(get_paste_store)
       instead of importing a module-level singleton.

Example usage in a route:
    @router.get("/paste/{paste_id}")
    async def get_paste(paste_id: str, store: PasteStore = Depends(get_paste_store)):
        return store.get_for_view(paste_id)
"""

from fastapi import Request

from app.services.paste_store import PasteStore


def get_paste_store(request: Request) -> PasteStore:
    """Return the PasteStore owned by the running application."""
    return request.app.state.paste_store
