"""
Order Domain Service.

Prices every line from the current catalog at creation and copies the result
into the order. Catalog edits made later never touch existing orders.

Confirming an order hands it to the kitchen: TicketService routes its lines
to stations exactly once per order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from rest_api.models import MenuItem, MenuModifier, Order, OrderItem, Table
from rest_api.services.base_service import BaseService
from rest_api.services.domain.ticket_service import TicketService
from rest_api.services.events.notifications import (
    notify_order_created,
    notify_order_updated,
    notify_tickets_created,
)
from shared.config.constants import (
    OrderStatus,
    OrderType,
    is_forward_order_transition,
    validate_order_status,
)
from shared.config.logging import order_logger as logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import NotFoundError, ValidationError
from shared.utils.schemas import CreateOrderRequest, OrderItemInput, OrderOutput

if TYPE_CHECKING:
    from fastapi import BackgroundTasks


class OrderService(BaseService):
    """Domain service for orders of a location."""

    def __init__(self, db: Session):
        super().__init__(db)

    def create(
        self,
        tenant_id: int,
        location_id: int,
        request: CreateOrderRequest,
        background_tasks: "BackgroundTasks | None" = None,
    ) -> OrderOutput:
        """
        Create an order with its lines priced from the current menu.

        Nothing is persisted if any line fails to resolve.

        Raises:
            NotFoundError: Unknown table, menu item or modifier for this location.
            ValidationError: A menu item is currently unavailable.
        """
        self.get_location(tenant_id, location_id)

        if request.table_id is not None:
            table = self._db.scalar(
                select(Table).where(Table.id == request.table_id, Table.location_id == location_id)
            )
            if table is None:
                raise NotFoundError("Table", request.table_id, location_id=location_id)

        items_by_id = self._load_menu_items(location_id, request.items)

        order = Order(
            location_id=location_id,
            table_id=request.table_id,
            type=request.type or OrderType.DINE_IN,
            status=OrderStatus.PENDING,
            customer_name=request.customer_name,
        )

        total_cents = 0
        for line in request.items:
            menu_item = items_by_id[line.menu_item_id]
            unit_price_cents = menu_item.price_cents + self._modifiers_price(menu_item, line.modifier_ids)
            total_cents += unit_price_cents * line.quantity
            order.items.append(
                OrderItem(
                    menu_item_id=menu_item.id,
                    modifier_ids=list(line.modifier_ids),
                    quantity=line.quantity,
                    unit_price_cents=unit_price_cents,
                    notes=line.notes,
                )
            )
        order.total_cents = total_cents

        self._db.add(order)
        safe_commit(self._db)
        self._db.refresh(order)

        logger.info(
            "Order created",
            order_id=order.id,
            location_id=location_id,
            lines=len(order.items),
            total_cents=total_cents,
        )
        notify_order_created(background_tasks, tenant_id, order)
        return OrderOutput.model_validate(order)

    def list(self, tenant_id: int, location_id: int, status: str | None = None) -> list[OrderOutput]:
        """Orders of a location, newest first."""
        self.get_location(tenant_id, location_id)

        stmt = (
            select(Order)
            .options(selectinload(Order.items))
            .where(Order.location_id == location_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        if status:
            stmt = stmt.where(Order.status == status)

        return [OrderOutput.model_validate(o) for o in self._db.scalars(stmt).all()]

    def get(self, tenant_id: int, location_id: int, order_id: int) -> OrderOutput:
        self.get_location(tenant_id, location_id)
        return OrderOutput.model_validate(self._get_order(location_id, order_id))

    def update_status(
        self,
        tenant_id: int,
        location_id: int,
        order_id: int,
        new_status: str,
        background_tasks: "BackgroundTasks | None" = None,
    ) -> OrderOutput:
        """
        Set an order's status.

        Any of the known statuses is accepted; moves off the usual path are
        logged. Entering `confirmed` routes the order to the kitchen unless it
        already has tickets.
        """
        if not validate_order_status(new_status):
            raise ValidationError(f"Invalid order status: {new_status}", order_id=order_id)

        self.get_location(tenant_id, location_id)
        order = self._get_order(location_id, order_id)
        old_status = order.status

        if old_status != new_status and not is_forward_order_transition(old_status, new_status):
            logger.warning(
                "Order moved off the usual status path",
                order_id=order_id,
                from_status=old_status,
                to_status=new_status,
            )

        order.status = new_status
        safe_commit(self._db)

        if new_status == OrderStatus.CONFIRMED:
            tickets, _ = TicketService(self._db).ensure_tickets_for_order(order_id)
            notify_tickets_created(background_tasks, tenant_id, location_id, tickets)

        self._db.refresh(order)
        logger.info("Order status changed", order_id=order_id, from_status=old_status, to_status=new_status)
        notify_order_updated(background_tasks, tenant_id, order)
        return OrderOutput.model_validate(order)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _get_order(self, location_id: int, order_id: int) -> Order:
        order = self._db.scalar(
            select(Order)
            .options(selectinload(Order.items))
            .where(Order.id == order_id, Order.location_id == location_id)
        )
        if order is None:
            raise NotFoundError("Order", order_id, location_id=location_id)
        return order

    def _load_menu_items(self, location_id: int, lines: list[OrderItemInput]) -> dict[int, MenuItem]:
        """Batch-load the referenced menu items with their modifiers."""
        requested_ids = {line.menu_item_id for line in lines}
        items = self._db.scalars(
            select(MenuItem)
            .options(selectinload(MenuItem.modifiers))
            .where(MenuItem.id.in_(requested_ids), MenuItem.location_id == location_id)
        ).all()
        items_by_id = {item.id: item for item in items}

        for line in lines:
            menu_item = items_by_id.get(line.menu_item_id)
            if menu_item is None:
                raise NotFoundError("Menu item", line.menu_item_id, location_id=location_id)
            if not menu_item.available:
                raise ValidationError(
                    f"Menu item '{menu_item.name}' is not available",
                    menu_item_id=menu_item.id,
                )
        return items_by_id

    @staticmethod
    def _modifiers_price(menu_item: MenuItem, modifier_ids: list[int]) -> int:
        modifiers: dict[int, MenuModifier] = {m.id: m for m in menu_item.modifiers}
        price = 0
        for modifier_id in modifier_ids:
            modifier = modifiers.get(modifier_id)
            if modifier is None:
                raise NotFoundError("Modifier", modifier_id, menu_item_id=menu_item.id)
            price += modifier.price_cents
        return price
