"""
Services module for business logic.

- domain/: Application services (bookings, orders, kitchen tickets)
- scheduling/: Table conflict detection, allocation and availability
- events/: Real-time notifications after commit

Usage:
    from rest_api.services.domain import BookingService
    service = BookingService(db)
    booking = service.create(tenant_id, location_id, request)
"""

from .base_service import BaseService
from .domain import BookingService, OrderService, TicketService

__all__ = [
    "BaseService",
    "BookingService",
    "OrderService",
    "TicketService",
]
