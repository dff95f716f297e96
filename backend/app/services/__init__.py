# Services package init
"""
PasteBin Backend — Services Layer
===================================

What:  Paste state and the rules around it, independent of HTTP.
How:   Route handlers receive a PasteStore via FastAPI dependency injection.

Service Inventory:
    - PasteStore: In-memory paste mapping with create / view / raw operations
    - generate_paste_id: CSPRNG-backed short hex identifiers
"""
