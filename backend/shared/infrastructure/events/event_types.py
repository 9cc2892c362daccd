"""
Event Type Constants.

Defines all event types published over Redis pub/sub.
"""

from shared.config.settings import settings

# =============================================================================
# Order events
# =============================================================================

ORDER_CREATED = "order.created"
ORDER_UPDATED = "order.updated"  # Any status change, including completion inference

# =============================================================================
# Kitchen ticket events
# Flow: pending → in_progress → ready → bumped
# =============================================================================

TICKET_CREATED = "ticket.created"
TICKET_STARTED = "ticket.started"
TICKET_READY = "ticket.ready"
TICKET_BUMPED = "ticket.bumped"

# =============================================================================
# Booking events
# =============================================================================

BOOKING_CREATED = "booking.created"
BOOKING_UPDATED = "booking.updated"

# =============================================================================
# Size limits
# =============================================================================

MAX_EVENT_SIZE = settings.event_max_size
