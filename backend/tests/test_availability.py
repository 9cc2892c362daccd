"""
Tests for the availability grid.
"""

from datetime import date, datetime, timedelta, timezone

from rest_api.services.scheduling import AvailabilityProjector, slot_grid


def availability_url(location_id):
    return f"/api/locations/{location_id}/availability"


class TestSlotGrid:
    def test_grid_shape(self):
        """26 start times, 09:00 to 21:30 UTC, 30 minutes apart."""
        grid = slot_grid(date(2026, 11, 20))

        assert len(grid) == 26
        assert grid[0] == datetime(2026, 11, 20, 9, 0, tzinfo=timezone.utc)
        assert grid[-1] == datetime(2026, 11, 20, 21, 30, tzinfo=timezone.utc)
        assert all(b - a == timedelta(minutes=30) for a, b in zip(grid, grid[1:]))


class TestAvailabilityProjector:
    def test_empty_location_has_no_availability(self, db_session, seed_location):
        slots = AvailabilityProjector(db_session).project(seed_location.id, date(2026, 11, 20), 1)
        assert len(slots) == 26
        assert not any(slot["available"] for slot in slots)

    def test_free_location_is_available_all_day(self, db_session, seed_location, seed_tables):
        slots = AvailabilityProjector(db_session).project(seed_location.id, date(2026, 11, 20), 12)
        assert all(slot["available"] for slot in slots)


class TestAvailabilityEndpoint:
    """GET /availability"""

    def test_returns_full_grid(self, client, auth_headers, seed_location, seed_tables):
        response = client.get(
            availability_url(seed_location.id),
            params={"date": "2026-11-20", "party_size": 4},
            headers=auth_headers,
        )

        assert response.status_code == 200
        slots = response.json()
        assert len(slots) == 26
        assert slots[0]["time"].startswith("2026-11-20T09:00:00")
        assert slots[-1]["time"].startswith("2026-11-20T21:30:00")
        assert all(slot["available"] for slot in slots)

    def test_booked_window_blocks_overlapping_slots(self, client, auth_headers, seed_location, seed_tables):
        """A full-house booking 19:00-20:30 blocks slots whose 90 minutes overlap it."""
        response = client.post(
            f"/api/locations/{seed_location.id}/bookings",
            json={"customer_name": "Party", "party_size": 12, "datetime": "2026-11-20T19:00:00Z"},
            headers=auth_headers,
        )
        assert response.status_code == 201

        slots = client.get(
            availability_url(seed_location.id),
            params={"date": "2026-11-20", "party_size": 2},
            headers=auth_headers,
        ).json()

        blocked = [slot["time"][11:16] for slot in slots if not slot["available"]]
        assert blocked == ["18:00", "18:30", "19:00", "19:30", "20:00"]

    def test_party_larger_than_location(self, client, auth_headers, seed_location, seed_tables):
        slots = client.get(
            availability_url(seed_location.id),
            params={"date": "2026-11-20", "party_size": 13},
            headers=auth_headers,
        ).json()
        assert len(slots) == 26
        assert not any(slot["available"] for slot in slots)

    def test_cancelled_booking_does_not_block(self, client, auth_headers, seed_location, seed_tables):
        created = client.post(
            f"/api/locations/{seed_location.id}/bookings",
            json={"customer_name": "Party", "party_size": 12, "datetime": "2026-11-20T19:00:00Z"},
            headers=auth_headers,
        ).json()
        client.patch(
            f"/api/locations/{seed_location.id}/bookings/{created['id']}/status",
            json={"status": "cancelled"},
            headers=auth_headers,
        )

        slots = client.get(
            availability_url(seed_location.id),
            params={"date": "2026-11-20", "party_size": 12},
            headers=auth_headers,
        ).json()
        assert all(slot["available"] for slot in slots)

    def test_invalid_party_size(self, client, auth_headers, seed_location):
        response = client.get(
            availability_url(seed_location.id),
            params={"date": "2026-11-20", "party_size": 0},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_oversized_party_still_gets_full_grid(self, client, auth_headers, seed_location, seed_tables):
        response = client.get(
            availability_url(seed_location.id),
            params={"date": "2026-11-20", "party_size": 150},
            headers=auth_headers,
        )
        assert response.status_code == 200
        slots = response.json()
        assert len(slots) == 26
        assert not any(slot["available"] for slot in slots)

    def test_missing_date(self, client, auth_headers, seed_location):
        response = client.get(
            availability_url(seed_location.id),
            params={"party_size": 2},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_other_tenant_location(self, client, auth_headers, other_location):
        response = client.get(
            availability_url(other_location.id),
            params={"date": "2026-11-20", "party_size": 2},
            headers=auth_headers,
        )
        assert response.status_code == 404
