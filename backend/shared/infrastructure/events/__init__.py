"""
Event System for Real-time Notifications via Redis pub/sub.

Modules:
- circuit_breaker.py: Circuit breaker and retry jitter
- event_types.py: Event type constants
- event_schema.py: Event dataclass with validation
- channels.py: Channel naming functions
- redis_pool.py: Connection pool management
- health_checks.py: Redis health check
- publisher.py: Core publish_event with retry
- domain_publishers.py: Order, ticket and booking publishers
"""

from .circuit_breaker import (
    CircuitState,
    EventCircuitBreaker,
    get_event_circuit_breaker,
    retry_delay,
)
from .event_types import (
    ORDER_CREATED,
    ORDER_UPDATED,
    TICKET_CREATED,
    TICKET_STARTED,
    TICKET_READY,
    TICKET_BUMPED,
    BOOKING_CREATED,
    BOOKING_UPDATED,
    MAX_EVENT_SIZE,
)
from .event_schema import Event
from .channels import channel_location_kitchen, channel_location_staff
from .redis_pool import get_redis_pool, close_redis_pool
from .health_checks import check_redis_health
from .publisher import publish_event
from .domain_publishers import (
    publish_to_kitchen,
    publish_to_staff,
    publish_order_event,
    publish_ticket_event,
    publish_booking_event,
)

__all__ = [
    # Circuit Breaker
    "CircuitState",
    "EventCircuitBreaker",
    "get_event_circuit_breaker",
    "retry_delay",
    # Event Types
    "ORDER_CREATED",
    "ORDER_UPDATED",
    "TICKET_CREATED",
    "TICKET_STARTED",
    "TICKET_READY",
    "TICKET_BUMPED",
    "BOOKING_CREATED",
    "BOOKING_UPDATED",
    "MAX_EVENT_SIZE",
    # Event Schema
    "Event",
    # Channels
    "channel_location_kitchen",
    "channel_location_staff",
    # Redis Pool
    "get_redis_pool",
    "close_redis_pool",
    # Health Checks
    "check_redis_health",
    # Publishing
    "publish_event",
    "publish_to_kitchen",
    "publish_to_staff",
    "publish_order_event",
    "publish_ticket_event",
    "publish_booking_event",
]
