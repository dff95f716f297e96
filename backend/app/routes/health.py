"""
PasteBin Backend — Health Check Route
=======================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Reports version, uptime and how many pastes are held in memory.
Who:   Called by container health checks, load balancers, and monitoring systems.

The store has no external dependencies, so a process that can answer
this request is healthy. The paste count is reported so memory growth of
the unbounded store can be watched from outside.
"""

import time

from fastapi import APIRouter, Depends

from app import __version__
from app.dependencies import get_paste_store
from app.schemas.paste import HealthResponse
from app.services.paste_store import PasteStore

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: PasteStore = Depends(get_paste_store)) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        pastes=len(store),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
