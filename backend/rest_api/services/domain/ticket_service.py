"""
Kitchen Ticket Domain Service.

Routes confirmed orders to kitchen stations and drives the ticket lifecycle:

    pending → in_progress → ready → bumped

Tickets only move forward. When the last ticket of an order is done (ready or
bumped) the order itself becomes ready.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import (
    KitchenStation,
    KitchenTicket,
    MenuItem,
    MenuItemStation,
    Order,
)
from rest_api.services.base_service import BaseService
from rest_api.services.events.notifications import (
    notify_order_updated,
    notify_ticket_status,
)
from shared.config.constants import (
    OrderStatus,
    TicketStatus,
    validate_ticket_status,
    validate_ticket_transition,
)
from shared.config.logging import kitchen_logger as logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from shared.utils.kitchen_schemas import (
    CreateStationRequest,
    KitchenTicketOutput,
    StationOutput,
)

if TYPE_CHECKING:
    from fastapi import BackgroundTasks


class TicketService(BaseService):
    """
    Domain service for kitchen stations and tickets.
    Encapsulates routing, status updates and order completion.
    """

    def __init__(self, db: Session):
        super().__init__(db)

    # =========================================================================
    # Routing
    # =========================================================================

    def route_order(self, order: Order) -> tuple[list[KitchenTicket], int]:
        """
        Create one pending ticket per station that prepares any of the order's items.

        Lines whose menu item has no station get no ticket. Calling this twice
        for one order creates duplicates; use ensure_tickets_for_order.

        Returns:
            (created tickets, number of lines routed to no station)
        """
        menu_item_ids = {line.menu_item_id for line in order.items}
        if not menu_item_ids:
            return [], 0

        links = self._db.execute(
            select(MenuItemStation.menu_item_id, MenuItemStation.station_id)
            .join(KitchenStation, KitchenStation.id == MenuItemStation.station_id)
            .where(MenuItemStation.menu_item_id.in_(menu_item_ids))
            .order_by(KitchenStation.sort_order, KitchenStation.id)
        ).all()

        station_ids: list[int] = []
        routed_items: set[int] = set()
        for menu_item_id, station_id in links:
            routed_items.add(menu_item_id)
            if station_id not in station_ids:
                station_ids.append(station_id)

        tickets = [
            KitchenTicket(order_id=order.id, station_id=station_id, status=TicketStatus.PENDING)
            for station_id in station_ids
        ]
        self._db.add_all(tickets)
        self._db.flush()

        unrouted = sum(1 for line in order.items if line.menu_item_id not in routed_items)
        if unrouted:
            logger.info(
                "Order lines without a kitchen station",
                order_id=order.id,
                unrouted_lines=unrouted,
            )
        logger.info("Order routed to kitchen", order_id=order.id, tickets=len(tickets))
        return tickets, unrouted

    def ensure_tickets_for_order(self, order_id: int) -> tuple[list[KitchenTicket], int]:
        """
        Route an order unless it already has tickets.

        The order row stays locked until commit, so repeated confirmations
        route it at most once.
        """
        order = self._db.scalar(
            select(Order).where(Order.id == order_id).with_for_update()
        )
        if order is None:
            raise NotFoundError("Order", order_id)

        existing = self._db.scalar(
            select(KitchenTicket.id).where(KitchenTicket.order_id == order_id).limit(1)
        )
        if existing is not None:
            self._db.rollback()
            logger.debug("Order already routed", order_id=order_id)
            return [], 0

        tickets, unrouted = self.route_order(order)
        safe_commit(self._db)
        for ticket in tickets:
            self._db.refresh(ticket)
        return tickets, unrouted

    # =========================================================================
    # Tickets
    # =========================================================================

    def list_tickets(
        self,
        tenant_id: int,
        location_id: int,
        station_id: int | None = None,
        status: str | None = None,
    ) -> list[KitchenTicketOutput]:
        """Tickets of a location, by priority then age."""
        self.get_location(tenant_id, location_id)

        stmt = (
            select(KitchenTicket)
            .join(KitchenStation, KitchenStation.id == KitchenTicket.station_id)
            .where(KitchenStation.location_id == location_id)
            .order_by(KitchenTicket.priority, KitchenTicket.created_at, KitchenTicket.id)
        )
        if station_id is not None:
            stmt = stmt.where(KitchenTicket.station_id == station_id)
        if status:
            stmt = stmt.where(KitchenTicket.status == status)

        return [KitchenTicketOutput.model_validate(t) for t in self._db.scalars(stmt).all()]

    def update_status(
        self,
        tenant_id: int,
        location_id: int,
        ticket_id: int,
        new_status: str,
        background_tasks: "BackgroundTasks | None" = None,
    ) -> KitchenTicketOutput:
        """
        Move a ticket forward.

        Entering in_progress stamps started_at once; entering ready or bumped
        stamps completed_at and may complete the order.

        Raises:
            NotFoundError: Ticket not in this location.
            InvalidTransitionError: Backward move.
        """
        if not validate_ticket_status(new_status):
            raise ValidationError(f"Invalid ticket status: {new_status}", ticket_id=ticket_id)

        self.get_location(tenant_id, location_id)
        ticket = self._db.scalar(
            select(KitchenTicket)
            .join(KitchenStation, KitchenStation.id == KitchenTicket.station_id)
            .where(KitchenTicket.id == ticket_id, KitchenStation.location_id == location_id)
            .with_for_update(of=KitchenTicket)
        )
        if ticket is None:
            raise NotFoundError("Ticket", ticket_id, location_id=location_id)

        if ticket.status == new_status:
            self._db.rollback()
            return KitchenTicketOutput.model_validate(ticket)

        if not validate_ticket_transition(ticket.status, new_status):
            self._db.rollback()
            raise InvalidTransitionError("ticket", ticket.status, new_status, ticket_id=ticket_id)

        now = datetime.now(timezone.utc)
        old_status = ticket.status
        ticket.status = new_status
        if new_status == TicketStatus.IN_PROGRESS and ticket.started_at is None:
            ticket.started_at = now
        elif new_status in TicketStatus.DONE:
            ticket.completed_at = now
        self._db.flush()

        completed_order = None
        if new_status in TicketStatus.DONE:
            completed_order = self._complete_order_if_done(ticket.order_id)

        safe_commit(self._db)
        self._db.refresh(ticket)

        logger.info(
            "Ticket status changed",
            ticket_id=ticket_id,
            order_id=ticket.order_id,
            from_status=old_status,
            to_status=new_status,
        )
        notify_ticket_status(background_tasks, tenant_id, location_id, ticket)
        if completed_order is not None:
            self._db.refresh(completed_order)
            notify_order_updated(background_tasks, tenant_id, completed_order)

        return KitchenTicketOutput.model_validate(ticket)

    def _complete_order_if_done(self, order_id: int) -> Order | None:
        """
        Mark the order ready when it has tickets and all of them are done.

        Orders already past the kitchen (ready, served, paid) are left alone.
        """
        order = self._db.scalar(select(Order).where(Order.id == order_id).with_for_update())
        if order is None or order.status not in OrderStatus.IN_KITCHEN:
            return None

        statuses = self._db.scalars(
            select(KitchenTicket.status).where(KitchenTicket.order_id == order_id)
        ).all()
        if not statuses or any(s not in TicketStatus.DONE for s in statuses):
            return None

        order.status = OrderStatus.READY
        logger.info("Order completed by kitchen", order_id=order_id, tickets=len(statuses))
        return order

    # =========================================================================
    # Stations
    # =========================================================================

    def create_station(
        self,
        tenant_id: int,
        location_id: int,
        request: CreateStationRequest,
    ) -> StationOutput:
        self.get_location(tenant_id, location_id)
        station = KitchenStation(
            location_id=location_id,
            name=request.name.strip(),
            sort_order=request.sort_order,
        )
        self._db.add(station)
        safe_commit(self._db)
        self._db.refresh(station)
        logger.info("Kitchen station created", station_id=station.id, location_id=location_id)
        return StationOutput.model_validate(station)

    def list_stations(self, tenant_id: int, location_id: int) -> list[StationOutput]:
        self.get_location(tenant_id, location_id)
        stations = self._db.scalars(
            select(KitchenStation)
            .where(KitchenStation.location_id == location_id)
            .order_by(KitchenStation.sort_order, KitchenStation.id)
        ).all()
        return [StationOutput.model_validate(s) for s in stations]

    def assign_item(self, tenant_id: int, location_id: int, station_id: int, menu_item_id: int) -> None:
        """Route a menu item to a station. Assigning twice is a no-op."""
        self.get_location(tenant_id, location_id)
        self._get_station(location_id, station_id)

        menu_item = self._db.scalar(
            select(MenuItem).where(MenuItem.id == menu_item_id, MenuItem.location_id == location_id)
        )
        if menu_item is None:
            raise NotFoundError("Menu item", menu_item_id, location_id=location_id)

        if self._db.get(MenuItemStation, (menu_item_id, station_id)) is not None:
            return

        self._db.add(MenuItemStation(menu_item_id=menu_item_id, station_id=station_id))
        safe_commit(self._db)
        logger.info("Menu item assigned to station", menu_item_id=menu_item_id, station_id=station_id)

    def delete_station(
        self,
        tenant_id: int,
        location_id: int,
        station_id: int,
        background_tasks: "BackgroundTasks | None" = None,
    ) -> None:
        """
        Remove a station with its item routes and tickets.

        Orders that lost a ticket are re-checked for completion against the
        tickets they still have.
        """
        self.get_location(tenant_id, location_id)
        station = self._get_station(location_id, station_id)
        order_ids = set(
            self._db.scalars(
                select(KitchenTicket.order_id).where(KitchenTicket.station_id == station_id)
            ).all()
        )

        self._db.delete(station)
        self._db.flush()
        completed = [
            order
            for order in (self._complete_order_if_done(order_id) for order_id in sorted(order_ids))
            if order is not None
        ]
        safe_commit(self._db)

        logger.info(
            "Kitchen station deleted",
            station_id=station_id,
            location_id=location_id,
            affected_orders=len(order_ids),
            completed_orders=len(completed),
        )
        for order in completed:
            self._db.refresh(order)
            notify_order_updated(background_tasks, tenant_id, order)

    def _get_station(self, location_id: int, station_id: int) -> KitchenStation:
        station = self._db.scalar(
            select(KitchenStation).where(
                KitchenStation.id == station_id,
                KitchenStation.location_id == location_id,
            )
        )
        if station is None:
            raise NotFoundError("Kitchen station", station_id, location_id=location_id)
        return station
