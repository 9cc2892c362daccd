"""
Base Service Class.

Architecture:
    Router (thin) → Service (business logic) → Model

Every operation is scoped to one location of the caller's tenant. A location
of another tenant is reported as missing, never as forbidden, so ids of other
tenants are not disclosed.

Usage:
    class BookingService(BaseService):
        def list(self, tenant_id: int, location_id: int) -> list[BookingOutput]:
            location = self.get_location(tenant_id, location_id)
            ...
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import Location
from shared.config.logging import get_logger
from shared.utils.exceptions import LocationNotFoundError

logger = get_logger(__name__)


class BaseService:
    """Holds the session and resolves tenant-scoped locations."""

    def __init__(self, db: Session):
        self._db = db

    @property
    def db(self) -> Session:
        """Database session."""
        return self._db

    def get_location(self, tenant_id: int, location_id: int, *, lock: bool = False) -> Location:
        """
        Load a location owned by `tenant_id`.

        With lock=True the row is locked FOR UPDATE until the transaction ends.

        Raises:
            LocationNotFoundError: Missing or owned by another tenant.
        """
        stmt = select(Location).where(
            Location.id == location_id,
            Location.tenant_id == tenant_id,
        )
        if lock:
            stmt = stmt.with_for_update()
        location = self._db.scalar(stmt)
        if location is None:
            raise LocationNotFoundError(location_id, tenant_id=tenant_id)
        return location
