"""
Redis probe for the detailed health endpoint.
"""

from __future__ import annotations

from typing import Any

from shared.config.settings import settings
from shared.utils.health import timed_check
from .redis_pool import get_redis_pool


@timed_check("redis", timeout=3.0)
async def check_redis_health() -> dict[str, Any]:
    pool = await get_redis_pool()
    await pool.ping()
    return {"max_connections": settings.redis_pool_max_connections}
