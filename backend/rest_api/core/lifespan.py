"""
Startup and shutdown of the REST API process.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from rest_api.models import Base
from shared.config.logging import rest_api_logger as logger, setup_logging
from shared.config.settings import settings
from shared.infrastructure.db import engine
from shared.infrastructure.events import close_redis_pool


def check_configuration() -> None:
    """
    Refuse to start a production process with unsafe settings.

    Outside production the same problems are only logged.
    """
    problems = settings.validate_production_secrets()
    for problem in problems:
        logger.error("Configuration problem", problem=problem)
    if problems and settings.environment == "production":
        raise RuntimeError("Unsafe production configuration: " + "; ".join(problems))


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    check_configuration()
    logger.info("REST API starting", port=settings.rest_api_port, env=settings.environment)

    if settings.auto_create_schema:
        Base.metadata.create_all(bind=engine)
        logger.info("Database schema ensured", backend=engine.dialect.name)

    try:
        yield
    finally:
        await close_redis_pool()
        logger.info("REST API stopped")
