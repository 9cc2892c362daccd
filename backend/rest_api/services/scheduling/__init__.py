"""
Table scheduling: conflict detection, allocation and availability.

Structure:
    BookingService (lifecycle, transactions)
        ↓
    conflict_index → allocator   (which tables are free, which to take)
    availability                 (read-only projection over a day)
    locks                        (per-location critical section)
"""

from .allocator import allocate_tables, free_capacity
from .availability import AvailabilityProjector, slot_grid
from .conflict_index import BookingWindowIndex, committed_table_ids
from .locks import LocationLockRegistry, location_locks

__all__ = [
    "allocate_tables",
    "free_capacity",
    "AvailabilityProjector",
    "slot_grid",
    "BookingWindowIndex",
    "committed_table_ids",
    "LocationLockRegistry",
    "location_locks",
]
