"""
Tests for the reservation conflict index.

Windows are half-open: a booking ending when another starts does not conflict.
"""

from datetime import datetime, timedelta, timezone

import pytest

from rest_api.models import Booking, BookingTable
from rest_api.services.scheduling import BookingWindowIndex, committed_table_ids
from shared.config.constants import BookingStatus


T19 = datetime(2026, 11, 20, 19, 0, tzinfo=timezone.utc)


def add_booking(db_session, location, tables, start, minutes=90, status=BookingStatus.CONFIRMED):
    booking = Booking(
        location_id=location.id,
        customer_name="Guest",
        party_size=2,
        starts_at=start,
        duration_minutes=minutes,
        ends_at=start + timedelta(minutes=minutes),
        status=status,
    )
    for table in tables:
        booking.tables.append(BookingTable(table_id=table.id))
    db_session.add(booking)
    db_session.commit()
    return booking


class TestCommittedTableIds:
    """Overlap rules of the per-window query."""

    def test_empty_when_no_bookings(self, db_session, seed_location, seed_tables):
        assert committed_table_ids(db_session, seed_location.id, T19, T19 + timedelta(hours=1)) == set()

    def test_overlapping_booking_holds_its_tables(self, db_session, seed_location, seed_tables):
        two, four, _ = seed_tables
        add_booking(db_session, seed_location, [two, four], T19)

        held = committed_table_ids(
            db_session, seed_location.id, T19 + timedelta(minutes=30), T19 + timedelta(hours=2)
        )
        assert held == {two.id, four.id}

    def test_touching_windows_do_not_conflict(self, db_session, seed_location, seed_tables):
        two = seed_tables[0]
        add_booking(db_session, seed_location, [two], T19, minutes=90)

        end = T19 + timedelta(minutes=90)
        assert committed_table_ids(db_session, seed_location.id, end, end + timedelta(hours=1)) == set()
        before = T19 - timedelta(hours=1)
        assert committed_table_ids(db_session, seed_location.id, before, T19) == set()

    def test_one_minute_overlap_conflicts(self, db_session, seed_location, seed_tables):
        two = seed_tables[0]
        add_booking(db_session, seed_location, [two], T19, minutes=90)

        start = T19 + timedelta(minutes=89)
        assert committed_table_ids(db_session, seed_location.id, start, start + timedelta(hours=1)) == {two.id}

    def test_window_containing_booking_conflicts(self, db_session, seed_location, seed_tables):
        six = seed_tables[2]
        add_booking(db_session, seed_location, [six], T19, minutes=30)

        held = committed_table_ids(
            db_session, seed_location.id, T19 - timedelta(hours=1), T19 + timedelta(hours=2)
        )
        assert held == {six.id}

    @pytest.mark.parametrize("status", [BookingStatus.CANCELLED, BookingStatus.NO_SHOW])
    def test_terminal_bookings_hold_nothing(self, db_session, seed_location, seed_tables, status):
        add_booking(db_session, seed_location, seed_tables, T19, status=status)
        assert committed_table_ids(db_session, seed_location.id, T19, T19 + timedelta(hours=1)) == set()

    @pytest.mark.parametrize("status", [BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.SEATED])
    def test_active_bookings_hold_tables(self, db_session, seed_location, seed_tables, status):
        add_booking(db_session, seed_location, [seed_tables[1]], T19, status=status)
        held = committed_table_ids(db_session, seed_location.id, T19, T19 + timedelta(hours=1))
        assert held == {seed_tables[1].id}

    def test_other_locations_are_ignored(self, db_session, seed_location, seed_tables, other_location):
        add_booking(db_session, seed_location, [seed_tables[0]], T19)
        assert committed_table_ids(db_session, other_location.id, T19, T19 + timedelta(hours=1)) == set()

    def test_naive_datetimes_are_treated_as_utc(self, db_session, seed_location, seed_tables):
        add_booking(db_session, seed_location, [seed_tables[0]], T19)
        naive = T19.replace(tzinfo=None)
        held = committed_table_ids(db_session, seed_location.id, naive, naive + timedelta(minutes=10))
        assert held == {seed_tables[0].id}


class TestBookingWindowIndex:
    """The bulk index answers like the per-window query."""

    def test_matches_per_window_query(self, db_session, seed_location, seed_tables):
        two, four, six = seed_tables
        add_booking(db_session, seed_location, [two], T19 - timedelta(hours=3))
        add_booking(db_session, seed_location, [four, six], T19, minutes=120)
        add_booking(db_session, seed_location, [two], T19 + timedelta(hours=1), status=BookingStatus.CANCELLED)

        day_start = T19.replace(hour=9)
        day_end = T19.replace(hour=23)
        index = BookingWindowIndex(db_session, seed_location.id, day_start, day_end)
        assert len(index) == 3

        start = day_start
        while start + timedelta(minutes=90) <= day_end:
            end = start + timedelta(minutes=90)
            assert index.committed_table_ids(start, end) == committed_table_ids(
                db_session, seed_location.id, start, end
            )
            start += timedelta(minutes=30)

    def test_rejects_window_outside_loaded_range(self, db_session, seed_location, seed_tables):
        index = BookingWindowIndex(db_session, seed_location.id, T19, T19 + timedelta(hours=2))
        with pytest.raises(ValueError):
            index.committed_table_ids(T19 - timedelta(minutes=1), T19 + timedelta(hours=1))
