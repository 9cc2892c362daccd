"""
Booking router.
CLEAN-ARCH: Thin router delegating to BookingService.
"""

from datetime import date
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.utils.schemas import (
    AvailabilitySlot,
    BookingOutput,
    CreateBookingRequest,
    CreateBookingResponse,
    UpdateBookingStatusRequest,
)
from rest_api.services.domain import BookingService

router = APIRouter(prefix="/api/locations/{location_id}", tags=["bookings"])


def _get_service(db: Session) -> BookingService:
    return BookingService(db)


@router.post(
    "/bookings",
    response_model=CreateBookingResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_booking(
    location_id: int,
    body: CreateBookingRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> CreateBookingResponse:
    """
    Book tables for a party.

    Returns 409 when the free tables cannot seat the party for the window.
    """
    return _get_service(db).create(
        tenant_id=ctx["tenant_id"],
        location_id=location_id,
        request=body,
        background_tasks=background_tasks,
    )


@router.get("/bookings", response_model=list[BookingOutput])
def list_bookings(
    location_id: int,
    day: date | None = Query(default=None, alias="date"),
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> list[BookingOutput]:
    """List bookings ordered by start time, optionally for one UTC day."""
    return _get_service(db).list(ctx["tenant_id"], location_id, day)


@router.get("/bookings/{booking_id}", response_model=BookingOutput)
def get_booking(
    location_id: int,
    booking_id: int,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> BookingOutput:
    return _get_service(db).get(ctx["tenant_id"], location_id, booking_id)


@router.patch("/bookings/{booking_id}/status", response_model=BookingOutput)
def update_booking_status(
    location_id: int,
    booking_id: int,
    body: UpdateBookingStatusRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> BookingOutput:
    """
    Change a booking's status.
    Cancelling or marking no-show frees its tables.
    """
    return _get_service(db).update_status(
        tenant_id=ctx["tenant_id"],
        location_id=location_id,
        booking_id=booking_id,
        new_status=body.status,
        background_tasks=background_tasks,
    )


@router.delete("/bookings/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_booking(
    location_id: int,
    booking_id: int,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> None:
    _get_service(db).delete(ctx["tenant_id"], location_id, booking_id)


@router.get("/availability", response_model=list[AvailabilitySlot])
def get_availability(
    location_id: int,
    day: date = Query(alias="date"),
    party_size: int = Query(gt=0),
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> list[AvailabilitySlot]:
    """
    Daily grid of start times with whether each could seat the party.
    Nothing is held; a later booking may still be rejected.
    """
    return _get_service(db).availability(ctx["tenant_id"], location_id, day, party_size)
