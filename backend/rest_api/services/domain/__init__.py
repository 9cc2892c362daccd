"""
Domain Services.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Model (entity)

Usage:
    from rest_api.services.domain import BookingService

    # In router
    service = BookingService(db)
    bookings = service.list(tenant_id, location_id)
"""

from .booking_service import BookingService
from .order_service import OrderService
from .ticket_service import TicketService

__all__ = [
    "BookingService",
    "OrderService",
    "TicketService",
]
