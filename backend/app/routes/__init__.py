# Routes package init
"""
PasteBin Backend — API Routes Package
=======================================

What:  HTTP route handlers that accept requests and return responses.
How:   Each route module handles a specific resource or representation.

Route Inventory:
    - pastes.py:  POST /api/paste            (create a paste)
                  GET  /api/paste/{id}       (full record, counts a view)
    - raw.py:     GET  /api/raw/{id}         (plain text, no view counted)
    - health.py:  GET  /health               (service health check)

Routes stay thin: they read the request, call PasteStore, and shape the
response. Validation and state live in the store.
"""
