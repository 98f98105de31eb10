"""Health & Readiness Probes — is the process up, can it reach productos.

Invariants:
    - GET /health/ is 200 whenever the process serves requests
    - GET /health/ready is 503 unless a SELECT 1 round-trip succeeds
    - Neither probe touches the productos table or logs on success

Design Decisions:
    - db_manager read at call time (module attribute): it is created in the
      lifespan, after this module is imported
"""

import logging
import time

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from productos_api.config import get_settings
from productos_api.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])

_STARTED = time.monotonic()


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {
        "status": "healthy",
        "service": "productos-api",
        "version": get_settings().api_version,
        "uptime_seconds": round(time.monotonic() - _STARTED, 1),
    }


@router.get("/ready")
async def readiness():
    manager = database.db_manager
    if manager is None:
        return _not_ready("database_not_initialized")

    started = time.perf_counter()
    if not await manager.health_check():
        logger.warning("Readiness: base de datos no disponible")
        return _not_ready("database_unavailable")
    return {
        "status": "ready",
        "checks": {
            "database": {
                "status": "healthy",
                "dialect": manager.engine.dialect.name,
                "latency_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        },
    }


def _not_ready(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )
