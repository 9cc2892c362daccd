"""
Real-time notifications for bookings, orders and kitchen tickets.

Events are published after the response is sent, through FastAPI
BackgroundTasks. Publishing is best-effort: the database commit has already
happened, so failures are logged and never surface to the caller.

Usage:
    from rest_api.services.events.notifications import notify_order_created

    notify_order_created(background_tasks, tenant_id, order)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Callable

from shared.config.settings import settings
from shared.config.logging import get_logger
from shared.infrastructure.events import (
    get_redis_pool,
    publish_order_event,
    publish_ticket_event,
    publish_booking_event,
    ORDER_CREATED,
    ORDER_UPDATED,
    TICKET_CREATED,
    TICKET_STARTED,
    TICKET_READY,
    TICKET_BUMPED,
    BOOKING_CREATED,
    BOOKING_UPDATED,
)
from shared.config.constants import TicketStatus
from rest_api.models import as_utc

if TYPE_CHECKING:
    from fastapi import BackgroundTasks
    from rest_api.models import Booking, KitchenTicket, Order

logger = get_logger(__name__)

# Ticket status → event announcing it
TICKET_STATUS_EVENTS: dict[str, str] = {
    TicketStatus.IN_PROGRESS: TICKET_STARTED,
    TicketStatus.READY: TICKET_READY,
    TicketStatus.BUMPED: TICKET_BUMPED,
}


async def _publish(
    publisher: Callable[..., Awaitable[None]],
    event_type: str,
    **kwargs: Any,
) -> None:
    """Run one domain publisher against the pooled client, logging failures."""
    try:
        redis_client = await get_redis_pool()
        await publisher(redis_client=redis_client, event_type=event_type, **kwargs)
        logger.debug("Event published", event_type=event_type)
    except Exception as e:
        logger.error(
            "Failed to publish event",
            event_type=event_type,
            error=str(e),
            error_type=type(e).__name__,
        )


def _schedule(
    background_tasks: "BackgroundTasks | None",
    publisher: Callable[..., Awaitable[None]],
    event_type: str,
    **kwargs: Any,
) -> None:
    if background_tasks is None or not settings.events_enabled:
        return
    background_tasks.add_task(_publish, publisher, event_type, **kwargs)


# =============================================================================
# Orders
# =============================================================================


def notify_order_created(background_tasks: "BackgroundTasks | None", tenant_id: int, order: "Order") -> None:
    _schedule(
        background_tasks,
        publish_order_event,
        ORDER_CREATED,
        tenant_id=tenant_id,
        location_id=order.location_id,
        order_id=order.id,
        status=order.status,
        table_id=order.table_id,
        total_cents=order.total_cents,
    )


def notify_order_updated(background_tasks: "BackgroundTasks | None", tenant_id: int, order: "Order") -> None:
    _schedule(
        background_tasks,
        publish_order_event,
        ORDER_UPDATED,
        tenant_id=tenant_id,
        location_id=order.location_id,
        order_id=order.id,
        status=order.status,
        table_id=order.table_id,
    )


# =============================================================================
# Kitchen tickets
# =============================================================================


def _ticket_kwargs(tenant_id: int, location_id: int, ticket: "KitchenTicket") -> dict[str, Any]:
    return {
        "tenant_id": tenant_id,
        "location_id": location_id,
        "ticket_id": ticket.id,
        "order_id": ticket.order_id,
        "station_id": ticket.station_id,
        "status": ticket.status,
    }


def notify_tickets_created(
    background_tasks: "BackgroundTasks | None",
    tenant_id: int,
    location_id: int,
    tickets: list["KitchenTicket"],
) -> None:
    for ticket in tickets:
        _schedule(
            background_tasks,
            publish_ticket_event,
            TICKET_CREATED,
            **_ticket_kwargs(tenant_id, location_id, ticket),
        )


def notify_ticket_status(
    background_tasks: "BackgroundTasks | None",
    tenant_id: int,
    location_id: int,
    ticket: "KitchenTicket",
) -> None:
    """Announce a ticket that moved to in_progress, ready or bumped."""
    event_type = TICKET_STATUS_EVENTS.get(ticket.status)
    if event_type is None:
        return
    _schedule(
        background_tasks,
        publish_ticket_event,
        event_type,
        **_ticket_kwargs(tenant_id, location_id, ticket),
    )


# =============================================================================
# Bookings
# =============================================================================


def _booking_kwargs(tenant_id: int, booking: "Booking") -> dict[str, Any]:
    return {
        "tenant_id": tenant_id,
        "location_id": booking.location_id,
        "booking_id": booking.id,
        "status": booking.status,
        "datetime_iso": as_utc(booking.starts_at).isoformat(),
        "party_size": booking.party_size,
        "table_ids": booking.table_ids,
    }


def notify_booking_created(background_tasks: "BackgroundTasks | None", tenant_id: int, booking: "Booking") -> None:
    _schedule(background_tasks, publish_booking_event, BOOKING_CREATED, **_booking_kwargs(tenant_id, booking))


def notify_booking_updated(background_tasks: "BackgroundTasks | None", tenant_id: int, booking: "Booking") -> None:
    _schedule(background_tasks, publish_booking_event, BOOKING_UPDATED, **_booking_kwargs(tenant_id, booking))
