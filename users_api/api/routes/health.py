"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the users table is unreachable (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from
      load balancer (ADR: production readiness)
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from users_api import __version__
from users_api.api.dependencies import get_user_repository
from users_api.core.repository_protocols import UserRepository

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {"status": "healthy", "service": "users-api", "version": __version__}


@router.get("/ready")
async def readiness_check(
    repository: UserRepository = Depends(get_user_repository),
):
    """Readiness probe, includes database connectivity."""
    if not await repository.ping():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
