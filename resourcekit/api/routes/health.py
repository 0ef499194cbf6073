"""Health & Readiness Checks — liveness plus per-resource readiness for orchestration.

Invariants:
    - GET {prefix}/health/ always returns 200 if process is up (liveness)
    - GET {prefix}/health/ready returns 503 if the database is unreachable
      or any mounted resource's table cannot be read
    - Every resource registered in app.state.resources is reported by name

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - db_manager read at call time (module attribute): it is created in the lifespan
    - Each resource is checked in its own session so one broken table does not
      poison the checks that follow it
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from resourcekit.core.errors import StorageError
from resourcekit.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness check. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "resourcekit-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness check — database connectivity, then one read per mounted resource."""
    manager = database.db_manager
    if not manager or not await manager.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
                "checks": {"database": "unavailable"},
            },
        )

    resources: dict[str, str] = {}
    for operations in getattr(request.app.state, "resources", []):
        try:
            async with manager.session() as db:
                await operations.check_available(db)
            resources[operations.name] = "healthy"
        except StorageError as e:
            logger.warning(
                f"Resource not ready: {operations.name}",
                extra={"resource": operations.name, "cause": e.cause.value},
            )
            resources[operations.name] = "unavailable"

    checks = {"database": "healthy", "resources": resources}
    if any(state != "healthy" for state in resources.values()):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "resource_unavailable",
                "checks": checks,
            },
        )
    return {"status": "ready", "checks": checks}
