"""
Event Services - Real-time notifications for staff and kitchen screens.

Provides:
- notify_* helpers that schedule best-effort publishing after the response
"""

from .notifications import (
    notify_order_created,
    notify_order_updated,
    notify_tickets_created,
    notify_ticket_status,
    notify_booking_created,
    notify_booking_updated,
)

__all__ = [
    "notify_order_created",
    "notify_order_updated",
    "notify_tickets_created",
    "notify_ticket_status",
    "notify_booking_created",
    "notify_booking_updated",
]
