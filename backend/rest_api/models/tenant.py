"""
Multi-Tenancy Models: Tenant and Location.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, BigIntPK, TimestampMixin

if TYPE_CHECKING:
    from .table import Table


class Tenant(TimestampMixin, Base):
    """
    A restaurant group (top-level tenant).
    Every other entity is reached through one of its locations.
    """

    __tablename__ = "tenant"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(Text, unique=True, nullable=False)

    locations: Mapped[list["Location"]] = relationship(back_populates="tenant")

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, slug='{self.slug}')>"


class Location(TimestampMixin, Base):
    """
    A physical restaurant of a tenant.
    Owns its tables, bookings, menu, stations and orders.
    """

    __tablename__ = "location"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    tenant_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("tenant.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[Optional[str]] = mapped_column(Text)
    # Informational only: the availability grid is computed in UTC
    timezone: Mapped[str] = mapped_column(Text, default="UTC", nullable=False)
    currency: Mapped[str] = mapped_column(Text, default="USD", nullable=False)

    tenant: Mapped["Tenant"] = relationship(back_populates="locations")
    tables: Mapped[list["Table"]] = relationship(back_populates="location")

    def __repr__(self) -> str:
        return f"<Location(id={self.id}, tenant_id={self.tenant_id}, name='{self.name}')>"
