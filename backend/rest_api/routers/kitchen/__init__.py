"""
Kitchen routers - /api/locations/{location_id}/kitchen/*
Station setup and ticket handling.
"""

from .stations import router as stations_router
from .tickets import router as tickets_router

__all__ = ["stations_router", "tickets_router"]
