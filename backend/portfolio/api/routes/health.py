"""Health Probe — liveness plus a data-directory readiness flag.

Invariants:
    - GET /api/health always returns 200 if the process is up
    - checks.storage is "healthy" only when the data directory is writable
"""

import asyncio

from fastapi import APIRouter, Depends, status

from portfolio import __version__
from portfolio.api.dependencies import get_store
from portfolio.infrastructure.json_store import JsonFileStore

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check(store: JsonFileStore = Depends(get_store)):
    """Liveness probe with a storage check."""
    writable = await asyncio.to_thread(store.is_writable)
    return {
        "status": "healthy",
        "service": "study-portfolio-api",
        "version": __version__,
        "checks": {"storage": "healthy" if writable else "unavailable"},
    }
