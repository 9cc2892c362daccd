"""
Kitchen Ticket router.
CLEAN-ARCH: Thin router delegating to TicketService.
"""

from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.utils.kitchen_schemas import (
    KitchenTicketOutput,
    TicketStatus,
    UpdateTicketStatusRequest,
)
from rest_api.services.domain import TicketService

router = APIRouter(prefix="/api/locations/{location_id}/kitchen", tags=["kitchen-tickets"])


def _get_service(db: Session) -> TicketService:
    return TicketService(db)


@router.get("/tickets", response_model=list[KitchenTicketOutput])
def list_tickets(
    location_id: int,
    station_id: int | None = None,
    status: TicketStatus | None = None,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> list[KitchenTicketOutput]:
    """List kitchen tickets by priority, oldest first."""
    return _get_service(db).list_tickets(
        tenant_id=ctx["tenant_id"],
        location_id=location_id,
        station_id=station_id,
        status=status,
    )


@router.patch("/tickets/{ticket_id}/status", response_model=KitchenTicketOutput)
def update_ticket_status(
    location_id: int,
    ticket_id: int,
    body: UpdateTicketStatusRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> KitchenTicketOutput:
    """
    Move a ticket forward.
    The order becomes ready once all of its tickets are done.
    """
    return _get_service(db).update_status(
        tenant_id=ctx["tenant_id"],
        location_id=location_id,
        ticket_id=ticket_id,
        new_status=body.status,
        background_tasks=background_tasks,
    )
