"""
Shared Pydantic schemas for bookings, availability and orders.
"""

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from shared.config.constants import Limits


# =============================================================================
# Common Types
# =============================================================================

BookingStatus = Literal["pending", "confirmed", "seated", "cancelled", "no_show"]
OrderType = Literal["dine_in", "takeaway"]
OrderStatus = Literal["pending", "confirmed", "preparing", "ready", "served", "paid"]


# =============================================================================
# Booking Schemas
# =============================================================================


class CreateBookingRequest(BaseModel):
    """Request to book tables for a party. Naive datetimes are read as UTC."""

    customer_name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    customer_email: str | None = Field(default=None, max_length=Limits.MAX_EMAIL_LENGTH)
    customer_phone: str | None = Field(default=None, max_length=Limits.MAX_PHONE_LENGTH)
    party_size: int = Field(gt=0)
    datetime: dt.datetime
    duration_minutes: int | None = Field(default=None, gt=0)
    notes: str | None = Field(default=None, max_length=Limits.MAX_NOTES_LENGTH)


class UpdateBookingStatusRequest(BaseModel):
    status: BookingStatus


class AssignedTableOutput(BaseModel):
    """A table selected for a new booking."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    number: int
    capacity: int


class BookingOutput(BaseModel):
    """Booking with the ids of its assigned tables."""

    id: int
    location_id: int
    customer_name: str
    customer_email: str | None = None
    customer_phone: str | None = None
    party_size: int
    datetime: dt.datetime
    duration_minutes: int
    status: BookingStatus
    notes: str | None = None
    table_ids: list[int]
    created_at: dt.datetime | None = None


class CreateBookingResponse(BookingOutput):
    """Response after creating a booking."""

    assigned_tables: list[AssignedTableOutput]


# =============================================================================
# Availability Schemas
# =============================================================================


class AvailabilitySlot(BaseModel):
    """One start time of the daily grid."""

    time: dt.datetime
    available: bool


# =============================================================================
# Order Schemas
# =============================================================================


class OrderItemInput(BaseModel):
    """Input for a single order line."""

    menu_item_id: int
    modifier_ids: list[int] = Field(default_factory=list)
    quantity: int = Field(ge=Limits.MIN_QUANTITY)
    notes: str | None = Field(default=None, max_length=Limits.MAX_NOTES_LENGTH)


class CreateOrderRequest(BaseModel):
    """Request to place an order."""

    table_id: int | None = None
    type: OrderType = "dine_in"
    customer_name: str | None = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    items: list[OrderItemInput] = Field(min_length=1, max_length=Limits.MAX_ORDER_LINES)


class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatus


class OrderItemOutput(BaseModel):
    """Output for a single order line."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    menu_item_id: int
    modifier_ids: list[int]
    quantity: int
    unit_price_cents: int
    notes: str | None = None


class OrderOutput(BaseModel):
    """Output for an order with its lines."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    location_id: int
    table_id: int | None = None
    type: OrderType
    status: OrderStatus
    customer_name: str | None = None
    total_cents: int
    items: list[OrderItemOutput]
    created_at: dt.datetime | None = None
