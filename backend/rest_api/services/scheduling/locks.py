"""
Per-location critical section for booking creation.

Check, allocate and commit must not interleave for the same location. Within
one process a lock per location id serializes them; the booking service also
takes a row lock on the location (SELECT ... FOR UPDATE) so separate worker
processes serialize on PostgreSQL as well.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from shared.config.logging import booking_logger as logger


class LocationLockRegistry:
    """Lazily created threading.Lock per location id."""

    def __init__(self) -> None:
        self._locks: dict[int, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, location_id: int) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(location_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[location_id] = lock
            return lock

    @contextmanager
    def hold(self, location_id: int) -> Iterator[None]:
        lock = self._lock_for(location_id)
        if not lock.acquire(blocking=False):
            logger.debug("Waiting for location booking lock", location_id=location_id)
            lock.acquire()
        try:
            yield
        finally:
            lock.release()


location_locks = LocationLockRegistry()
