"""
Booking routers - /api/locations/{location_id}/bookings, /availability
Table reservations and the daily availability grid.
"""

from .routes import router

__all__ = ["router"]
