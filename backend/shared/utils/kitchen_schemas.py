"""
Kitchen Pydantic schemas: stations and tickets.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from shared.config.constants import Limits

TicketStatus = Literal["pending", "in_progress", "ready", "bumped"]


class CreateStationRequest(BaseModel):
    """Request to create a kitchen station."""

    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    sort_order: int = 0


class StationOutput(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    location_id: int
    name: str
    sort_order: int


class KitchenTicketOutput(BaseModel):
    """Output for a kitchen ticket."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    order_id: int
    station_id: int
    status: TicketStatus
    priority: int
    created_at: datetime | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None


class UpdateTicketStatusRequest(BaseModel):
    """Request to update ticket status."""

    status: TicketStatus
