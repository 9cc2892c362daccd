"""
Liveness and dependency health endpoints. No token required.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from shared.config.settings import settings
from shared.infrastructure.db import SessionLocal
from shared.infrastructure.events import check_redis_health, get_event_circuit_breaker
from shared.utils.health import HealthStatus, gather_health, timed_check

SERVICE_NAME = "rest-api"

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health_check():
    """Process liveness; touches no dependency."""
    return {
        "status": HealthStatus.HEALTHY.value,
        "service": SERVICE_NAME,
        "environment": settings.environment,
    }


@timed_check("database", timeout=3.0)
async def check_database_health() -> dict:
    with SessionLocal() as db:
        db.execute(text("SELECT 1"))
        return {"backend": db.get_bind().dialect.name}


@router.get("/health/detailed")
async def detailed_health_check():
    """Database and Redis reachability plus publisher breaker state; 503 unless all healthy."""
    overall, dependencies = await gather_health(check_database_health(), check_redis_health())
    body = {
        "service": SERVICE_NAME,
        "environment": settings.environment,
        "status": overall.value,
        "dependencies": dependencies,
        "event_publisher": get_event_circuit_breaker().get_stats(),
    }
    if overall is not HealthStatus.HEALTHY:
        return JSONResponse(content=body, status_code=503)
    return body
