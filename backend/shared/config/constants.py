"""
Centralized constants for the backend application.
Avoid magic strings for statuses, order types and validation limits.

Usage:
    from shared.config.constants import BookingStatus, TicketStatus

    if booking.status in BookingStatus.TERMINAL:
        ...

    if validate_ticket_transition(ticket.status, TicketStatus.READY):
        ...
"""

from typing import Final


# =============================================================================
# Entity Status Constants
# =============================================================================


class TableStatus:
    """Physical table status. Advisory only, never consulted by allocation."""

    AVAILABLE: Final[str] = "available"
    OCCUPIED: Final[str] = "occupied"
    RESERVED: Final[str] = "reserved"
    OUT_OF_SERVICE: Final[str] = "out_of_service"

    ALL: Final[list[str]] = [AVAILABLE, OCCUPIED, RESERVED, OUT_OF_SERVICE]


class BookingStatus:
    """Booking status constants."""

    PENDING: Final[str] = "pending"
    CONFIRMED: Final[str] = "confirmed"
    SEATED: Final[str] = "seated"
    CANCELLED: Final[str] = "cancelled"
    NO_SHOW: Final[str] = "no_show"

    ALL: Final[list[str]] = [PENDING, CONFIRMED, SEATED, CANCELLED, NO_SHOW]
    # Bookings in these statuses no longer hold their tables
    TERMINAL: Final[list[str]] = [CANCELLED, NO_SHOW]


class OrderType:
    """Order type constants."""

    DINE_IN: Final[str] = "dine_in"
    TAKEAWAY: Final[str] = "takeaway"

    ALL: Final[list[str]] = [DINE_IN, TAKEAWAY]


class OrderStatus:
    """Order status constants."""

    PENDING: Final[str] = "pending"
    CONFIRMED: Final[str] = "confirmed"
    PREPARING: Final[str] = "preparing"
    READY: Final[str] = "ready"
    SERVED: Final[str] = "served"
    PAID: Final[str] = "paid"

    ALL: Final[list[str]] = [PENDING, CONFIRMED, PREPARING, READY, SERVED, PAID]
    # Orders the kitchen can still complete
    IN_KITCHEN: Final[list[str]] = [PENDING, CONFIRMED, PREPARING]


class TicketStatus:
    """Kitchen ticket status constants."""

    PENDING: Final[str] = "pending"
    IN_PROGRESS: Final[str] = "in_progress"
    READY: Final[str] = "ready"
    BUMPED: Final[str] = "bumped"

    ALL: Final[list[str]] = [PENDING, IN_PROGRESS, READY, BUMPED]
    DONE: Final[list[str]] = [READY, BUMPED]


# =============================================================================
# Status Transitions
# =============================================================================

# Valid booking status transitions (from -> [allowed to states]).
# Cancelled and no_show are terminal: leaving them would re-occupy tables
# without a conflict check.
BOOKING_TRANSITIONS: Final[dict[str, list[str]]] = {
    BookingStatus.PENDING: [BookingStatus.CONFIRMED, BookingStatus.SEATED, BookingStatus.CANCELLED, BookingStatus.NO_SHOW],
    BookingStatus.CONFIRMED: [BookingStatus.PENDING, BookingStatus.SEATED, BookingStatus.CANCELLED, BookingStatus.NO_SHOW],
    BookingStatus.SEATED: [BookingStatus.CONFIRMED, BookingStatus.CANCELLED, BookingStatus.NO_SHOW],
    BookingStatus.CANCELLED: [],
    BookingStatus.NO_SHOW: [],
}

# Documented order flow: PENDING → CONFIRMED → PREPARING → READY → SERVED → PAID.
# Orders accept any status; moves outside this table are logged, not rejected.
ORDER_TRANSITIONS: Final[dict[str, list[str]]] = {
    OrderStatus.PENDING: [OrderStatus.CONFIRMED],
    OrderStatus.CONFIRMED: [OrderStatus.PREPARING, OrderStatus.READY],
    OrderStatus.PREPARING: [OrderStatus.READY],
    OrderStatus.READY: [OrderStatus.SERVED],
    OrderStatus.SERVED: [OrderStatus.PAID],
    OrderStatus.PAID: [],
}

# Tickets move forward only; skipping ahead is allowed.
TICKET_TRANSITIONS: Final[dict[str, list[str]]] = {
    TicketStatus.PENDING: [TicketStatus.IN_PROGRESS, TicketStatus.READY, TicketStatus.BUMPED],
    TicketStatus.IN_PROGRESS: [TicketStatus.READY, TicketStatus.BUMPED],
    TicketStatus.READY: [TicketStatus.BUMPED],
    TicketStatus.BUMPED: [],
}


# =============================================================================
# Validation Constants
# =============================================================================


class Limits:
    """Validation limits."""

    # Quantity limits
    MIN_QUANTITY: Final[int] = 1

    # String lengths
    MAX_NAME_LENGTH: Final[int] = 200
    MAX_NOTES_LENGTH: Final[int] = 2000
    MAX_EMAIL_LENGTH: Final[int] = 255
    MAX_PHONE_LENGTH: Final[int] = 50

    # Order limits
    MAX_ORDER_LINES: Final[int] = 100


# =============================================================================
# Status Validation Functions
# =============================================================================


def validate_order_status(status: str) -> bool:
    """Validate that an order status is valid."""
    return status in OrderStatus.ALL


def validate_ticket_status(status: str) -> bool:
    """Validate that a ticket status is valid."""
    return status in TicketStatus.ALL


def validate_booking_transition(current_status: str, new_status: str) -> bool:
    """
    Validate that a booking status transition is allowed.

    Setting the current status again is treated as valid (no-op).
    """
    if current_status == new_status:
        return True
    return new_status in BOOKING_TRANSITIONS.get(current_status, [])


def is_forward_order_transition(current_status: str, new_status: str) -> bool:
    """Whether an order status change follows the documented flow."""
    if current_status == new_status:
        return True
    return new_status in ORDER_TRANSITIONS.get(current_status, [])


def validate_ticket_transition(current_status: str, new_status: str) -> bool:
    """
    Validate that a ticket status transition is allowed.

    Setting the current status again is treated as valid (no-op).
    """
    if current_status == new_status:
        return True
    return new_status in TICKET_TRANSITIONS.get(current_status, [])
