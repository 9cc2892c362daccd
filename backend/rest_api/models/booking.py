"""
Booking Models: Booking and its table assignments.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, CheckConstraint, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import BookingStatus
from .base import Base, BigIntPK, TimestampMixin


class Booking(TimestampMixin, Base):
    """
    A time-bounded claim on one or more tables of a location.

    The occupancy window is [starts_at, ends_at). `ends_at` is derived from
    the duration at creation so overlap checks stay index-friendly on every
    database.
    """

    __tablename__ = "booking"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    location_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("location.id", ondelete="CASCADE"), nullable=False, index=True
    )
    customer_name: Mapped[str] = mapped_column(Text, nullable=False)
    customer_email: Mapped[Optional[str]] = mapped_column(Text)
    customer_phone: Mapped[Optional[str]] = mapped_column(Text)
    party_size: Mapped[int] = mapped_column(Integer, nullable=False)
    starts_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=90)
    ends_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[str] = mapped_column(Text, default=BookingStatus.PENDING, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text)

    __table_args__ = (
        CheckConstraint("party_size > 0", name="chk_booking_party_size_positive"),
        CheckConstraint("duration_minutes > 0", name="chk_booking_duration_positive"),
        # Conflict lookups: location + window
        Index("ix_booking_location_window", "location_id", "starts_at", "ends_at"),
    )

    tables: Mapped[list["BookingTable"]] = relationship(
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingTable.table_id",
    )

    @property
    def table_ids(self) -> list[int]:
        return [bt.table_id for bt in self.tables]

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, party_size={self.party_size}, status='{self.status}')>"


class BookingTable(Base):
    """Assignment of one table to one booking."""

    __tablename__ = "booking_table"

    booking_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("booking.id", ondelete="CASCADE"), primary_key=True
    )
    table_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("restaurant_table.id", ondelete="CASCADE"), primary_key=True, index=True
    )

    booking: Mapped["Booking"] = relationship(back_populates="tables")
