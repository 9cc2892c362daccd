"""
Table Model: physical seating resource of a location.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import TableStatus
from .base import Base, BigIntPK, TimestampMixin

if TYPE_CHECKING:
    from .tenant import Location


class Table(TimestampMixin, Base):
    """
    Physical table in a location.

    `status` reflects the floor (who is sitting where right now) and is never
    consulted by booking allocation, which works purely from time windows.
    """

    # "table" is a reserved SQL keyword
    __tablename__ = "restaurant_table"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    location_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("location.id", ondelete="CASCADE"), nullable=False, index=True
    )
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(Text, default=TableStatus.AVAILABLE, nullable=False)

    __table_args__ = (
        CheckConstraint("capacity > 0", name="chk_table_capacity_positive"),
        UniqueConstraint("location_id", "number", name="uq_table_location_number"),
        Index("ix_table_location_status", "location_id", "status"),
    )

    location: Mapped["Location"] = relationship(back_populates="tables")

    def __repr__(self) -> str:
        return f"<Table(id={self.id}, number={self.number}, capacity={self.capacity})>"
