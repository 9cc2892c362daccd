"""
Domain-Specific Event Publishing Functions.

High-level functions for publishing order, ticket and booking events.
Routing:
- Orders: kitchen and staff channels
- Tickets: kitchen channel, plus staff once food is ready
- Bookings: staff channel
"""

from __future__ import annotations

from typing import Any

import redis.asyncio as redis

from .event_types import TICKET_READY, TICKET_BUMPED
from .event_schema import Event
from .publisher import publish_event
from .channels import channel_location_kitchen, channel_location_staff


async def publish_to_kitchen(redis_client: redis.Redis, location_id: int, event: Event) -> int:
    """Publish to the kitchen channel of a location."""
    return await publish_event(redis_client, channel_location_kitchen(location_id), event)


async def publish_to_staff(redis_client: redis.Redis, location_id: int, event: Event) -> int:
    """Publish to the front-of-house channel of a location."""
    return await publish_event(redis_client, channel_location_staff(location_id), event)


async def publish_order_event(
    redis_client: redis.Redis,
    event_type: str,
    tenant_id: int,
    location_id: int,
    order_id: int,
    status: str,
    table_id: int | None = None,
    total_cents: int | None = None,
) -> None:
    """Publish order.created / order.updated to kitchen and staff."""
    entity: dict[str, Any] = {"order_id": order_id, "status": status, "table_id": table_id}
    if total_cents is not None:
        entity["total_cents"] = total_cents

    event = Event(
        type=event_type,
        tenant_id=tenant_id,
        location_id=location_id,
        entity=entity,
    )
    await publish_to_kitchen(redis_client, location_id, event)
    await publish_to_staff(redis_client, location_id, event)


async def publish_ticket_event(
    redis_client: redis.Redis,
    event_type: str,
    tenant_id: int,
    location_id: int,
    ticket_id: int,
    order_id: int,
    station_id: int,
    status: str,
) -> None:
    """
    Publish kitchen ticket events.

    Every ticket event goes to the kitchen; ready and bumped tickets are also
    announced to staff so runners can pick up the food.
    """
    event = Event(
        type=event_type,
        tenant_id=tenant_id,
        location_id=location_id,
        entity={
            "ticket_id": ticket_id,
            "order_id": order_id,
            "station_id": station_id,
            "status": status,
        },
    )
    await publish_to_kitchen(redis_client, location_id, event)
    if event_type in (TICKET_READY, TICKET_BUMPED):
        await publish_to_staff(redis_client, location_id, event)


async def publish_booking_event(
    redis_client: redis.Redis,
    event_type: str,
    tenant_id: int,
    location_id: int,
    booking_id: int,
    status: str,
    datetime_iso: str,
    party_size: int,
    table_ids: list[int] | None = None,
) -> None:
    """Publish booking.created / booking.updated to staff."""
    event = Event(
        type=event_type,
        tenant_id=tenant_id,
        location_id=location_id,
        entity={
            "booking_id": booking_id,
            "status": status,
            "datetime": datetime_iso,
            "party_size": party_size,
            "table_ids": table_ids or [],
        },
    )
    await publish_to_staff(redis_client, location_id, event)
