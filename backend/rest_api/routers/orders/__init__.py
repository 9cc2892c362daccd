"""
Order routers - /api/locations/{location_id}/orders
"""

from .routes import router

__all__ = ["router"]
