"""
Infrastructure: database sessions, request correlation, Redis events.
"""

from shared.infrastructure.db import SessionLocal, engine, get_db, safe_commit
from shared.infrastructure.events import close_redis_pool, get_redis_pool, publish_event

__all__ = [
    "engine",
    "SessionLocal",
    "get_db",
    "safe_commit",
    "get_redis_pool",
    "close_redis_pool",
    "publish_event",
]
