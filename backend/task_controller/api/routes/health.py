"""Health Routes — liveness and readiness of the task controller.

Invariants:
    - GET /health/ answers 200 while the process serves requests
    - GET /health/ready answers 503 until the database is initialised and reachable
    - Readiness reports connection pool occupancy next to the database check
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from task_controller.infrastructure import database

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {"status": "healthy", "service": "task-controller"}


@router.get("/ready")
async def readiness():
    """Ping the database and report how busy the pool is."""
    manager = database.db_manager
    if manager is None:
        return _not_ready("database_not_initialized")
    if not await manager.health_check():
        return _not_ready("database_unavailable")
    return {
        "status": "ready",
        "checks": {"database": "healthy", "pool": manager.pool_status()},
    }


def _not_ready(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )
