"""
Kitchen Models: KitchenStation, MenuItemStation, KitchenTicket.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import TicketStatus
from .base import Base, BigIntPK, TimestampMixin

if TYPE_CHECKING:
    from .order import Order


class KitchenStation(TimestampMixin, Base):
    """A preparation area of a location (grill, bar, pastry)."""

    __tablename__ = "kitchen_station"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    location_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("location.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    item_links: Mapped[list["MenuItemStation"]] = relationship(
        back_populates="station",
        cascade="all, delete",
    )
    tickets: Mapped[list["KitchenTicket"]] = relationship(
        back_populates="station",
        cascade="all, delete",
    )

    def __repr__(self) -> str:
        return f"<KitchenStation(id={self.id}, name='{self.name}')>"


class MenuItemStation(Base):
    """Routes a menu item to a station. An item may go to several stations."""

    __tablename__ = "menu_item_station"

    menu_item_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("menu_item.id", ondelete="CASCADE"), primary_key=True
    )
    station_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("kitchen_station.id", ondelete="CASCADE"), primary_key=True, index=True
    )

    station: Mapped["KitchenStation"] = relationship(back_populates="item_links")


class KitchenTicket(TimestampMixin, Base):
    """
    The part of an order a single station must prepare.

    Status moves forward only: pending → in_progress → ready → bumped.
    """

    __tablename__ = "kitchen_ticket"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    order_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("customer_order.id", ondelete="CASCADE"), nullable=False, index=True
    )
    station_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("kitchen_station.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(Text, default=TicketStatus.PENDING, nullable=False)
    priority: Mapped[int] = mapped_column(Integer, default=0, nullable=False)  # Lower = earlier
    started_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    __table_args__ = (
        # Kitchen display queries by station+status
        Index("ix_kitchen_ticket_station_status", "station_id", "status"),
    )

    order: Mapped["Order"] = relationship(back_populates="kitchen_tickets")
    station: Mapped["KitchenStation"] = relationship(back_populates="tickets")

    def __repr__(self) -> str:
        return f"<KitchenTicket(id={self.id}, order_id={self.order_id}, status='{self.status}')>"
