"""
Booking Domain Service.

Creates bookings by allocating tables under a per-location critical section,
and manages their status afterwards. Cancelled and no-show bookings release
their tables for every later conflict check.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from rest_api.models import Booking, BookingTable, Table, as_utc
from rest_api.services.base_service import BaseService
from rest_api.services.events.notifications import (
    notify_booking_created,
    notify_booking_updated,
)
from rest_api.services.scheduling import (
    AvailabilityProjector,
    LocationLockRegistry,
    allocate_tables,
    committed_table_ids,
    location_locks,
)
from shared.config.constants import BookingStatus, validate_booking_transition
from shared.config.logging import booking_logger as logger, mask_email
from shared.config.settings import settings
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import (
    AllocationConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from shared.utils.schemas import (
    AssignedTableOutput,
    AvailabilitySlot,
    BookingOutput,
    CreateBookingRequest,
    CreateBookingResponse,
)

if TYPE_CHECKING:
    from fastapi import BackgroundTasks


class BookingService(BaseService):
    """
    Domain service for table bookings.

    Creation runs conflict check, allocation and commit as one critical
    section per location, so two overlapping requests cannot both claim the
    same table.
    """

    def __init__(self, db: Session, locks: LocationLockRegistry | None = None):
        super().__init__(db)
        self._locks = locks or location_locks

    # =========================================================================
    # Create
    # =========================================================================

    def create(
        self,
        tenant_id: int,
        location_id: int,
        request: CreateBookingRequest,
        background_tasks: "BackgroundTasks | None" = None,
    ) -> CreateBookingResponse:
        """
        Book tables for a party.

        Raises:
            ValidationError: Party size or duration out of range.
            LocationNotFoundError: Location missing or owned by another tenant.
            AllocationConflictError: Free tables cannot seat the party in the window.
        """
        duration = request.duration_minutes or settings.booking_default_duration_minutes
        customer_name = request.customer_name.strip()
        if not customer_name:
            raise ValidationError("Customer name is required", field="customer_name")
        self._validate_party_size(request.party_size)
        if not 0 < duration <= settings.booking_max_duration_minutes:
            raise ValidationError(
                f"Duration must be between 1 and {settings.booking_max_duration_minutes} minutes",
                field="duration_minutes",
                value=duration,
            )

        starts_at = as_utc(request.datetime)
        ends_at = starts_at + timedelta(minutes=duration)

        with self._locks.hold(location_id):
            try:
                self.get_location(tenant_id, location_id, lock=True)

                committed = committed_table_ids(self._db, location_id, starts_at, ends_at)
                inventory = self._db.scalars(
                    select(Table).where(Table.location_id == location_id).order_by(Table.id)
                ).all()
                assigned = allocate_tables(inventory, committed, request.party_size)
                if assigned is None:
                    raise AllocationConflictError(
                        location_id=location_id,
                        party_size=request.party_size,
                        starts_at=starts_at.isoformat(),
                        committed_tables=len(committed),
                    )

                booking = Booking(
                    location_id=location_id,
                    customer_name=customer_name,
                    customer_email=request.customer_email,
                    customer_phone=request.customer_phone,
                    party_size=request.party_size,
                    starts_at=starts_at,
                    duration_minutes=duration,
                    ends_at=ends_at,
                    status=BookingStatus.PENDING,
                    notes=request.notes,
                )
                booking.tables = [BookingTable(table_id=table.id) for table in assigned]
                self._db.add(booking)
                safe_commit(self._db)
            except Exception:
                # Release the location row lock before leaving the critical section
                self._db.rollback()
                raise

        self._db.refresh(booking)
        logger.info(
            "Booking created",
            booking_id=booking.id,
            location_id=location_id,
            party_size=booking.party_size,
            table_ids=booking.table_ids,
            customer_email=mask_email(booking.customer_email),
        )
        notify_booking_created(background_tasks, tenant_id, booking)

        output = self._to_output(booking)
        return CreateBookingResponse(
            **output.model_dump(),
            assigned_tables=[AssignedTableOutput.model_validate(t) for t in assigned],
        )

    # =========================================================================
    # Queries
    # =========================================================================

    def list(self, tenant_id: int, location_id: int, day: date | None = None) -> list[BookingOutput]:
        """Bookings of a location ordered by start time, optionally for one UTC day."""
        self.get_location(tenant_id, location_id)

        stmt = (
            select(Booking)
            .options(selectinload(Booking.tables))
            .where(Booking.location_id == location_id)
            .order_by(Booking.starts_at, Booking.id)
        )
        if day is not None:
            day_start = datetime.combine(day, time.min, tzinfo=timezone.utc)
            stmt = stmt.where(
                Booking.starts_at >= day_start,
                Booking.starts_at < day_start + timedelta(days=1),
            )

        return [self._to_output(b) for b in self._db.scalars(stmt).all()]

    def get(self, tenant_id: int, location_id: int, booking_id: int) -> BookingOutput:
        self.get_location(tenant_id, location_id)
        return self._to_output(self._get_booking(location_id, booking_id))

    def availability(
        self,
        tenant_id: int,
        location_id: int,
        day: date,
        party_size: int,
    ) -> list[AvailabilitySlot]:
        """Daily slot grid with whether each start time could seat the party."""
        self._validate_party_size(party_size)
        self.get_location(tenant_id, location_id)
        slots = AvailabilityProjector(self._db).project(location_id, day, party_size)
        return [AvailabilitySlot(**slot) for slot in slots]

    # =========================================================================
    # Mutations
    # =========================================================================

    def update_status(
        self,
        tenant_id: int,
        location_id: int,
        booking_id: int,
        new_status: str,
        background_tasks: "BackgroundTasks | None" = None,
    ) -> BookingOutput:
        """
        Move a booking to a new status.

        Cancelled and no_show are final. Setting the current status again is a no-op.

        Raises:
            InvalidTransitionError: The move is not allowed.
        """
        self.get_location(tenant_id, location_id)
        booking = self._get_booking(location_id, booking_id, lock=True)

        if booking.status == new_status:
            self._db.rollback()
            return self._to_output(booking)

        if not validate_booking_transition(booking.status, new_status):
            self._db.rollback()
            raise InvalidTransitionError(
                "booking", booking.status, new_status, booking_id=booking_id
            )

        old_status = booking.status
        booking.status = new_status
        safe_commit(self._db)
        self._db.refresh(booking)

        logger.info(
            "Booking status changed",
            booking_id=booking_id,
            from_status=old_status,
            to_status=new_status,
            released_tables=new_status in BookingStatus.TERMINAL,
        )
        notify_booking_updated(background_tasks, tenant_id, booking)
        return self._to_output(booking)

    def delete(self, tenant_id: int, location_id: int, booking_id: int) -> None:
        """Remove a booking and its table assignments."""
        self.get_location(tenant_id, location_id)
        booking = self._get_booking(location_id, booking_id)
        self._db.delete(booking)
        safe_commit(self._db)
        logger.info("Booking deleted", booking_id=booking_id, location_id=location_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _validate_party_size(party_size: int) -> None:
        if party_size < 1:
            raise ValidationError("Party size must be positive", field="party_size", value=party_size)
        limit = settings.booking_max_party_size
        if limit is not None and party_size > limit:
            raise ValidationError(
                f"Party size must not exceed {limit}",
                field="party_size",
                value=party_size,
            )

    def _get_booking(self, location_id: int, booking_id: int, *, lock: bool = False) -> Booking:
        stmt = (
            select(Booking)
            .options(selectinload(Booking.tables))
            .where(Booking.id == booking_id, Booking.location_id == location_id)
        )
        if lock:
            stmt = stmt.with_for_update()
        booking = self._db.scalar(stmt)
        if booking is None:
            raise NotFoundError("Booking", booking_id, location_id=location_id)
        return booking

    @staticmethod
    def _to_output(booking: Booking) -> BookingOutput:
        return BookingOutput(
            id=booking.id,
            location_id=booking.location_id,
            customer_name=booking.customer_name,
            customer_email=booking.customer_email,
            customer_phone=booking.customer_phone,
            party_size=booking.party_size,
            datetime=as_utc(booking.starts_at),
            duration_minutes=booking.duration_minutes,
            status=booking.status,
            notes=booking.notes,
            table_ids=booking.table_ids,
            created_at=as_utc(booking.created_at),
        )
