"""
Reservation conflict index.

Answers "which tables of this location are already committed during
[start, end)?". Two windows conflict iff
``existing.start < end and existing.end > start``: a booking ending exactly
when another starts does not conflict. Cancelled and no-show bookings never
hold tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import Booking, BookingTable, as_utc
from shared.config.constants import BookingStatus


def _holding_bookings(location_id: int, start: datetime, end: datetime):
    return (
        select(Booking.id, Booking.starts_at, Booking.ends_at, BookingTable.table_id)
        .join(BookingTable, BookingTable.booking_id == Booking.id)
        .where(
            Booking.location_id == location_id,
            Booking.status.not_in(BookingStatus.TERMINAL),
            Booking.starts_at < end,
            Booking.ends_at > start,
        )
    )


def committed_table_ids(
    db: Session,
    location_id: int,
    start: datetime,
    end: datetime,
) -> set[int]:
    """Table ids held by non-terminal bookings overlapping [start, end)."""
    stmt = _holding_bookings(location_id, as_utc(start), as_utc(end))
    return {row.table_id for row in db.execute(stmt)}


@dataclass(frozen=True)
class _Hold:
    starts_at: datetime
    ends_at: datetime
    table_id: int


class BookingWindowIndex:
    """
    In-memory conflict index over a time range.

    Loads every table hold overlapping [range_start, range_end) in one query
    and answers per-window lookups without going back to the database. Used
    to evaluate many slots of the same day.
    """

    def __init__(self, db: Session, location_id: int, range_start: datetime, range_end: datetime):
        self.range_start = as_utc(range_start)
        self.range_end = as_utc(range_end)
        rows = db.execute(_holding_bookings(location_id, self.range_start, self.range_end))
        self._holds = [
            _Hold(as_utc(row.starts_at), as_utc(row.ends_at), row.table_id)
            for row in rows
        ]

    def __len__(self) -> int:
        return len(self._holds)

    def committed_table_ids(self, start: datetime, end: datetime) -> set[int]:
        """Same answer as the module-level function for a window inside the loaded range."""
        start, end = as_utc(start), as_utc(end)
        if start < self.range_start or end > self.range_end:
            raise ValueError("window outside the loaded range")
        return {
            hold.table_id
            for hold in self._holds
            if hold.starts_at < end and hold.ends_at > start
        }
