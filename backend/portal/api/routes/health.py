"""Health & Readiness Checks — liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the database or the chain node is unreachable
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import portal.infrastructure.chain_client as chain_module
import portal.infrastructure.database as db_module

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness check. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "ledger-portal-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness check — database and blockchain node connectivity."""
    db_ok = await db_module.db_manager.health_check() if db_module.db_manager else False
    chain_ok = (
        await chain_module.chain_client.is_connected()
        if chain_module.chain_client else False
    )
    checks = {
        "database": "healthy" if db_ok else "unavailable",
        "chain": "healthy" if chain_ok else "unavailable",
    }
    if not (db_ok and chain_ok):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}
