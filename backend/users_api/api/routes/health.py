"""Health & Readiness Probes — liveness and readiness endpoints for orchestrators.

Invariants:
    - GET /healthz always returns 200 "ok" and never touches storage (liveness)
    - GET /readyz returns 503 if the database is unreachable (readiness)
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse

from users_api.infrastructure.database import get_db_manager

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/healthz", response_class=PlainTextResponse)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return PlainTextResponse("ok")


@router.get("/readyz", response_class=PlainTextResponse)
async def readiness_check():
    """Readiness probe, includes database connectivity."""
    manager = get_db_manager()
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return PlainTextResponse(
            "database unavailable\n",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return PlainTextResponse("ready")
