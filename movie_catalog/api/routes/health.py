"""Health & Readiness Probes.

Invariants:
    - GET /health/ answers 200 whenever the process is serving (liveness)
    - GET /health/ready answers 200 only when the database round-trips and the
      upload directories are writable; otherwise 503 with every failing check listed
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from movie_catalog.infrastructure import database
from movie_catalog.infrastructure.file_storage import FileStorage, get_file_storage

router = APIRouter(prefix="/health", tags=["health"])

SERVICE_NAME = "movie-catalog-api"
SERVICE_VERSION = "1.0.0"


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@router.get("/ready")
async def readiness(storage: FileStorage = Depends(get_file_storage)):
    manager = database.db_manager
    checks = {
        "database": bool(manager) and await manager.health_check(),
        "storage": storage.is_writable(),
    }
    report = {name: "healthy" if ok else "unavailable" for name, ok in checks.items()}
    if not all(checks.values()):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": report},
        )
    return {"status": "ready", "checks": report}
