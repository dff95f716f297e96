# Middleware package init
"""
PasteBin Backend — Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [CORS] → [Logging] → [Rate Limit]
            → [Body Size] → [GZip] → Route Handler

    1. Request ID first: every response, including 429, 413 and the
       generic 500, passes back through it and gets X-Request-ID
    2. CORS: preflights answered, headers added to error responses too
    3. Logging: sees the final status, rejections included
    4. Rate Limit: reject abusive clients before any body is read
    5. Body Size: refuse oversized declared uploads
    6. GZip: FastAPI's stock compression

Responses travel back through the chain in reverse order, so the request
ID header and the access log line see the final status code.
"""
