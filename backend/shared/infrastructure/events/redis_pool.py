"""
Process-wide async Redis client used for publishing and health probes.
"""

from __future__ import annotations

import asyncio

import redis.asyncio as redis

from shared.config.logging import get_logger
from shared.config.settings import REDIS_URL, settings

logger = get_logger(__name__)

_redis_pool: redis.Redis | None = None
# Bound to the loop of the first caller; reset by close_redis_pool
_create_lock: asyncio.Lock | None = None


def _build_client() -> redis.Redis:
    return redis.from_url(
        REDIS_URL,
        decode_responses=True,
        max_connections=settings.redis_pool_max_connections,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_socket_timeout,
        health_check_interval=30,
    )


async def get_redis_pool() -> redis.Redis:
    """Return the shared client, creating it on first use."""
    global _redis_pool, _create_lock
    if _redis_pool is None:
        if _create_lock is None:
            _create_lock = asyncio.Lock()
        async with _create_lock:
            if _redis_pool is None:
                _redis_pool = _build_client()
                logger.info(
                    "Redis client created",
                    max_connections=settings.redis_pool_max_connections,
                )
    return _redis_pool


async def close_redis_pool() -> None:
    """Close the shared client; the next get_redis_pool creates a new one."""
    global _redis_pool, _create_lock
    client, _redis_pool, _create_lock = _redis_pool, None, None
    if client is not None:
        await client.close()
        logger.info("Redis client closed")
