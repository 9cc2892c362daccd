"""
Order router.
CLEAN-ARCH: Thin router delegating to OrderService.
"""

from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.utils.schemas import (
    CreateOrderRequest,
    OrderOutput,
    OrderStatus,
    UpdateOrderStatusRequest,
)
from rest_api.services.domain import OrderService

router = APIRouter(prefix="/api/locations/{location_id}/orders", tags=["orders"])


def _get_service(db: Session) -> OrderService:
    return OrderService(db)


@router.post("", response_model=OrderOutput, status_code=status.HTTP_201_CREATED)
def create_order(
    location_id: int,
    body: CreateOrderRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> OrderOutput:
    """
    Place an order.
    Line prices are copied from the current menu.
    """
    return _get_service(db).create(
        tenant_id=ctx["tenant_id"],
        location_id=location_id,
        request=body,
        background_tasks=background_tasks,
    )


@router.get("", response_model=list[OrderOutput])
def list_orders(
    location_id: int,
    status: OrderStatus | None = None,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> list[OrderOutput]:
    return _get_service(db).list(ctx["tenant_id"], location_id, status)


@router.get("/{order_id}", response_model=OrderOutput)
def get_order(
    location_id: int,
    order_id: int,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> OrderOutput:
    return _get_service(db).get(ctx["tenant_id"], location_id, order_id)


@router.patch("/{order_id}/status", response_model=OrderOutput)
def update_order_status(
    location_id: int,
    order_id: int,
    body: UpdateOrderStatusRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> OrderOutput:
    """
    Set an order's status.
    Confirming sends the order to the kitchen stations once.
    """
    return _get_service(db).update_status(
        tenant_id=ctx["tenant_id"],
        location_id=location_id,
        order_id=order_id,
        new_status=body.status,
        background_tasks=background_tasks,
    )
