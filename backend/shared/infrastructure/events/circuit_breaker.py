"""
Circuit breaker guarding Redis publishes.

While Redis is unreachable every publish would otherwise wait out its socket
timeout and retries. After enough consecutive failed publishes the breaker
opens and publishes are skipped until `recovery_timeout` has passed; then a
limited number of probe publishes decide whether it closes again.
"""

from __future__ import annotations

import random
import threading
import time
from enum import Enum

from shared.config.logging import get_logger
from shared.config.settings import settings

logger = get_logger(__name__)

# Upper bound for a single retry delay, in seconds
MAX_RETRY_DELAY = 10.0


class CircuitState(Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class EventCircuitBreaker:
    """Process-wide, thread-safe breaker for the event publisher."""

    def __init__(
        self,
        failure_threshold: int = 5,
        recovery_timeout: float = 30.0,
        half_open_max_calls: int = 1,
    ):
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.half_open_max_calls = half_open_max_calls

        self._lock = threading.Lock()
        self._state = CircuitState.CLOSED
        self._consecutive_failures = 0
        self._opened_at = 0.0
        self._probes_in_flight = 0
        self._rejected = 0

    @property
    def state(self) -> CircuitState:
        return self._state

    def _open(self) -> None:
        self._state = CircuitState.OPEN
        self._opened_at = time.monotonic()

    def can_execute(self) -> bool:
        """Whether a publish may be attempted now. Counts rejections."""
        with self._lock:
            if (
                self._state is CircuitState.OPEN
                and time.monotonic() - self._opened_at >= self.recovery_timeout
            ):
                self._state = CircuitState.HALF_OPEN
                self._probes_in_flight = 0
                logger.info("Event publisher probing Redis")

            allowed = self._state is CircuitState.CLOSED or (
                self._state is CircuitState.HALF_OPEN
                and self._probes_in_flight < self.half_open_max_calls
            )
            if not allowed:
                self._rejected += 1
            elif self._state is CircuitState.HALF_OPEN:
                self._probes_in_flight += 1
            return allowed

    def record_failure(self) -> None:
        with self._lock:
            self._consecutive_failures += 1
            if self._state is CircuitState.HALF_OPEN:
                self._open()
                logger.error("Redis probe failed, event publisher stays open")
            elif (
                self._state is CircuitState.CLOSED
                and self._consecutive_failures >= self.failure_threshold
            ):
                self._open()
                logger.error(
                    "Event publisher opened",
                    consecutive_failures=self._consecutive_failures,
                )

    def record_success(self) -> None:
        with self._lock:
            if self._state is not CircuitState.CLOSED:
                logger.info("Event publisher closed, Redis reachable again")
            self._state = CircuitState.CLOSED
            self._consecutive_failures = 0

    def get_stats(self) -> dict:
        with self._lock:
            return {
                "state": self._state.value,
                "consecutive_failures": self._consecutive_failures,
                "rejected_count": self._rejected,
            }


_event_circuit_breaker: EventCircuitBreaker | None = None
_breaker_guard = threading.Lock()


def get_event_circuit_breaker() -> EventCircuitBreaker:
    """The breaker shared by every publisher in this process."""
    global _event_circuit_breaker
    with _breaker_guard:
        if _event_circuit_breaker is None:
            # One publish_event call is one failure, however many retries it made
            _event_circuit_breaker = EventCircuitBreaker(
                failure_threshold=settings.redis_publish_max_retries + 2,
            )
        return _event_circuit_breaker


def retry_delay(attempt: int, base_delay: float) -> float:
    """Full-jitter exponential backoff for retry `attempt` (0-based)."""
    ceiling = min(base_delay * 2 ** attempt, MAX_RETRY_DELAY)
    return random.uniform(base_delay, max(base_delay, ceiling))
