"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from src.application.dto.responses import ComponentHealthResponse, HealthResponse
from src.config import get_settings

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


async def check_database() -> ComponentHealthResponse:
    """Round-trip a trivial query through the pool."""
    from src.infrastructure.storage.sqlite import get_pool

    try:
        pool = await get_pool()
        start = time.time()
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
        return ComponentHealthResponse(
            status="up",
            latency_ms=(time.time() - start) * 1000,
        )
    except Exception as e:
        return ComponentHealthResponse(status="down", error=str(e))


async def build_health() -> HealthResponse:
    db_status = await check_database()
    return HealthResponse(
        status="healthy" if db_status.status == "up" else "unhealthy",
        version=get_settings().app_version,
        uptime_seconds=time.time() - _start_time,
        database=db_status,
    )


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Service health check.

    Returns status, uptime and database connectivity.
    """
    return await build_health()
