"""
PasteBin Backend — Application Package Initializer
====================================================

What: Marks the `app` directory as a Python package.
Who:  Used by uvicorn (app.main:app), pytest, and the pastebin-server script.

Architecture Note:
    ┌─────────────────────────────────────┐
    │      Middleware (transport layer)   │  ← rate limit, body limit, CORS, gzip
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │        Services (Paste Store)       │  ← validation, ids, view counting
    ├─────────────────────────────────────┤
    │          Models & Schemas           │  ← Paste dataclass + Pydantic contracts
    └─────────────────────────────────────┘

    Pastes live in process memory only and are lost on restart.
"""

__version__ = "1.0.0"
