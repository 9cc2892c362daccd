"""
Dependency health probes.

A probe is an async function that returns optional details or raises. The
`timed_check` decorator turns it into one that always returns a
ComponentHealth, so a hung or broken dependency can never take the health
endpoint down with it:

    @timed_check("redis", timeout=3.0)
    async def check_redis_health():
        await pool.ping()
"""

from __future__ import annotations

import asyncio
import functools
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from shared.config.logging import get_logger

logger = get_logger(__name__)

Probe = Callable[[], Awaitable["dict[str, Any] | None"]]


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


@dataclass(frozen=True)
class ComponentHealth:
    component: str
    status: HealthStatus
    latency_ms: float
    error: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status is HealthStatus.HEALTHY

    def as_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "status": self.status.value,
            "latency_ms": round(self.latency_ms, 2),
        }
        if self.error:
            body["error"] = self.error
        if self.details:
            body["details"] = self.details
        return body


def timed_check(component: str, timeout: float = 5.0) -> Callable[[Probe], Callable[[], Awaitable[ComponentHealth]]]:
    """Bound a probe by `timeout` seconds and report failures instead of raising."""

    def decorator(probe: Probe) -> Callable[[], Awaitable[ComponentHealth]]:
        @functools.wraps(probe)
        async def run() -> ComponentHealth:
            started = time.perf_counter()

            def elapsed() -> float:
                return (time.perf_counter() - started) * 1000

            try:
                details = await asyncio.wait_for(probe(), timeout=timeout)
            except asyncio.TimeoutError:
                error = f"no answer within {timeout}s"
            except Exception as exc:
                error = str(exc) or type(exc).__name__
            else:
                return ComponentHealth(component, HealthStatus.HEALTHY, elapsed(), details=details or {})

            logger.warning("Dependency check failed", component=component, error=error)
            return ComponentHealth(component, HealthStatus.UNHEALTHY, elapsed(), error=error)

        return run

    return decorator


async def gather_health(*checks: Awaitable[ComponentHealth]) -> tuple[HealthStatus, dict[str, dict[str, Any]]]:
    """
    Run checks concurrently.

    The overall status is HEALTHY only when every component is; otherwise
    DEGRADED. Components are keyed by name.
    """
    results = await asyncio.gather(*checks)
    overall = HealthStatus.HEALTHY if all(r.ok for r in results) else HealthStatus.DEGRADED
    return overall, {r.component: r.as_dict() for r in results}
