"""Health & Readiness Probes - liveness and readiness endpoints.

Invariants:
    - GET /health always returns 200 if the process is up; never touches the store
    - GET /health/ready returns 503 if the database is unreachable
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from userapi.infrastructure import database
from userapi.schemas.common import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["Health"])


@router.get(
    "", response_model=HealthResponse, status_code=status.HTTP_200_OK,
    responses={200: {"description": "Service is healthy"}},
)
async def health_check():
    """Basic liveness probe."""
    return HealthResponse(status="ok", message="Service is running")


@router.get("/ready")
async def readiness_check():
    """Readiness probe - includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
