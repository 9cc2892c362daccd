"""
Availability projector.

Evaluates a fixed daily grid of start times for a party size. Read-only:
nothing is held, so a slot reported available can be taken before the
caller books it; booking creation re-checks under the location lock.

The grid is laid out in UTC. Location.timezone is not consulted.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import TypedDict

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import Table
from rest_api.services.scheduling.allocator import free_capacity
from rest_api.services.scheduling.conflict_index import BookingWindowIndex
from shared.config.settings import settings


class Slot(TypedDict):
    time: datetime
    available: bool


def slot_grid(day: date) -> list[datetime]:
    """
    Start times of the grid for `day`.

    With default settings: 26 slots, 09:00 to 21:30 UTC, every 30 minutes.
    """
    first = datetime.combine(
        day, time(hour=settings.availability_first_slot_hour), tzinfo=timezone.utc
    )
    step = timedelta(minutes=settings.availability_slot_interval_minutes)
    return [first + step * i for i in range(settings.availability_slot_count)]


class AvailabilityProjector:
    """Projects free capacity of one location onto the daily slot grid."""

    def __init__(self, db: Session):
        self._db = db

    def project(self, location_id: int, day: date, party_size: int) -> list[Slot]:
        window = timedelta(minutes=settings.booking_default_duration_minutes)
        grid = slot_grid(day)

        inventory = self._db.scalars(
            select(Table).where(Table.location_id == location_id).order_by(Table.id)
        ).all()
        index = BookingWindowIndex(self._db, location_id, grid[0], grid[-1] + window)

        return [
            {
                "time": start,
                "available": free_capacity(
                    inventory, index.committed_table_ids(start, start + window)
                ) >= party_size,
            }
            for start in grid
        ]
