"""
SQLAlchemy engine and session handling.

Requests get a session through the `get_db` dependency; services commit
through `safe_commit` so a failed commit never leaves the session unusable.
"""

import os
from collections.abc import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from shared.config.settings import DATABASE_URL

# Upper bound for the per-process connection pool
MAX_POOL_SIZE = 20


def build_engine(url: str) -> Engine:
    """
    Engine for `url`.

    SQLite (tests and local tooling) keeps SQLAlchemy's pool defaults and may
    be shared across threads; server databases get a pool sized to the CPU.
    """
    if make_url(url).get_backend_name() == "sqlite":
        return create_engine(url, connect_args={"check_same_thread": False})

    pool_size = min(2 * (os.cpu_count() or 4) + 1, MAX_POOL_SIZE)
    return create_engine(
        url,
        pool_size=pool_size,
        max_overflow=15,
        pool_pre_ping=True,
        pool_timeout=30,
        pool_recycle=1800,
        connect_args={"connect_timeout": 10},
    )


engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db() -> Iterator[Session]:
    """FastAPI dependency: one session per request, closed afterwards."""
    with SessionLocal() as db:
        yield db


def safe_commit(db: Session) -> None:
    """Commit, or roll back and re-raise."""
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
