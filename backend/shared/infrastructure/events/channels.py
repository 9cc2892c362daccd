"""
Redis Channel Naming.

Every channel is scoped to a single location.
"""

from __future__ import annotations


def _validate_positive_id(id_value: int, name: str) -> None:
    if not isinstance(id_value, int) or id_value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {id_value}")


def channel_location_kitchen(location_id: int) -> str:
    """Channel for kitchen displays of a location (tickets and orders)."""
    _validate_positive_id(location_id, "location_id")
    return f"location:{location_id}:kitchen"


def channel_location_staff(location_id: int) -> str:
    """Channel for front-of-house staff of a location (bookings and orders)."""
    _validate_positive_id(location_id, "location_id")
    return f"location:{location_id}:staff"
