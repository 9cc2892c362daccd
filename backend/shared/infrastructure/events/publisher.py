"""
Publishing a single event to a Redis channel.
"""

from __future__ import annotations

import asyncio

import redis.asyncio as redis

from shared.config.logging import get_logger
from shared.config.settings import settings
from .circuit_breaker import get_event_circuit_breaker, retry_delay
from .event_schema import Event
from .event_types import MAX_EVENT_SIZE

logger = get_logger(__name__)


def _encode(event: Event) -> str:
    payload = event.to_json()
    size = len(payload.encode("utf-8"))
    if size > MAX_EVENT_SIZE:
        raise ValueError(f"{event.type} event is {size} bytes, limit is {MAX_EVENT_SIZE}")
    return payload


async def publish_event(redis_client: redis.Redis, channel: str, event: Event) -> int:
    """
    Publish `event` on `channel` and return the subscriber count.

    Transient errors are retried with jittered backoff up to
    REDIS_PUBLISH_MAX_RETRIES attempts. Returns 0 without touching Redis while
    the circuit breaker is open.

    Raises:
        ValueError: The encoded event exceeds EVENT_MAX_SIZE.
        Exception: The last Redis error once every attempt failed.
    """
    payload = _encode(event)

    breaker = get_event_circuit_breaker()
    if not breaker.can_execute():
        logger.warning("Publisher open, event dropped", channel=channel, event_type=event.type)
        return 0

    attempts = max(1, settings.redis_publish_max_retries)
    for attempt in range(attempts):
        try:
            receivers = await redis_client.publish(channel, payload)
        except Exception as exc:
            if attempt + 1 == attempts:
                breaker.record_failure()
                logger.error(
                    "Event publish failed",
                    channel=channel,
                    event_type=event.type,
                    attempts=attempts,
                    error=str(exc),
                )
                raise
            delay = retry_delay(attempt, settings.redis_publish_retry_delay)
            logger.warning(
                "Event publish retry",
                channel=channel,
                attempt=attempt + 1,
                delay_s=round(delay, 3),
                error=str(exc),
            )
            await asyncio.sleep(delay)
        else:
            breaker.record_success()
            return receivers

    return 0
