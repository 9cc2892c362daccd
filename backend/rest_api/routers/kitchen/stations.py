"""
Kitchen station router.
CLEAN-ARCH: Thin router delegating to TicketService.
"""

from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.utils.kitchen_schemas import CreateStationRequest, StationOutput
from rest_api.services.domain import TicketService

router = APIRouter(prefix="/api/locations/{location_id}/kitchen", tags=["kitchen-stations"])


def _get_service(db: Session) -> TicketService:
    return TicketService(db)


@router.post("/stations", response_model=StationOutput, status_code=status.HTTP_201_CREATED)
def create_station(
    location_id: int,
    body: CreateStationRequest,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> StationOutput:
    return _get_service(db).create_station(ctx["tenant_id"], location_id, body)


@router.get("/stations", response_model=list[StationOutput])
def list_stations(
    location_id: int,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> list[StationOutput]:
    return _get_service(db).list_stations(ctx["tenant_id"], location_id)


@router.post(
    "/stations/{station_id}/items/{menu_item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def assign_item_to_station(
    location_id: int,
    station_id: int,
    menu_item_id: int,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> None:
    """
    Route a menu item to a station.
    Items without any station never reach the kitchen.
    """
    _get_service(db).assign_item(ctx["tenant_id"], location_id, station_id, menu_item_id)


@router.delete("/stations/{station_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_station(
    location_id: int,
    station_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> None:
    """Remove a station; its tickets go with it."""
    _get_service(db).delete_station(ctx["tenant_id"], location_id, station_id, background_tasks)
