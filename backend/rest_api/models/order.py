"""
Order Models: Order and OrderItem.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import JSON, BigInteger, CheckConstraint, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import OrderStatus, OrderType
from .base import Base, BigIntPK, TimestampMixin

if TYPE_CHECKING:
    from .kitchen import KitchenTicket


class Order(TimestampMixin, Base):
    """
    A customer order of a location.

    `total_cents` is computed once from the line snapshots at creation and
    never recalculated.
    """

    # "order" is a reserved SQL keyword
    __tablename__ = "customer_order"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    location_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("location.id", ondelete="CASCADE"), nullable=False, index=True
    )
    table_id: Mapped[Optional[int]] = mapped_column(
        BigInteger, ForeignKey("restaurant_table.id", ondelete="SET NULL"), index=True
    )
    type: Mapped[str] = mapped_column(Text, default=OrderType.DINE_IN, nullable=False)
    status: Mapped[str] = mapped_column(Text, default=OrderStatus.PENDING, nullable=False)
    customer_name: Mapped[Optional[str]] = mapped_column(Text)
    total_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("total_cents >= 0", name="chk_order_total_non_negative"),
        Index("ix_order_location_status", "location_id", "status"),
    )

    items: Mapped[list["OrderItem"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )
    kitchen_tickets: Mapped[list["KitchenTicket"]] = relationship(
        back_populates="order",
        cascade="all, delete",
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, status='{self.status}', total_cents={self.total_cents})>"


class OrderItem(Base):
    """
    One line of an order.
    Stores the price at the time of order for historical accuracy.
    """

    __tablename__ = "order_item"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    order_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("customer_order.id", ondelete="CASCADE"), nullable=False, index=True
    )
    menu_item_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("menu_item.id"), nullable=False, index=True
    )
    modifier_ids: Mapped[list[int]] = mapped_column(JSON, default=list, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    # Item price plus selected modifier prices, captured at creation
    unit_price_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="chk_order_item_quantity_positive"),
        CheckConstraint("unit_price_cents >= 0", name="chk_order_item_price_non_negative"),
    )

    order: Mapped["Order"] = relationship(back_populates="items")
