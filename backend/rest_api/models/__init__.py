"""
SQLAlchemy ORM Models Package.

Models are organized into domain-specific modules:
- base: Base class and TimestampMixin
- tenant: Tenant, Location
- table: Table
- booking: Booking, BookingTable
- catalog: MenuItem, MenuModifier
- order: Order, OrderItem
- kitchen: KitchenStation, MenuItemStation, KitchenTicket
"""

# Base classes
from .base import Base, TimestampMixin, as_utc

# Core tenant models
from .tenant import Tenant, Location

# Seating
from .table import Table
from .booking import Booking, BookingTable

# Menu
from .catalog import MenuItem, MenuModifier

# Orders and kitchen
from .order import Order, OrderItem
from .kitchen import KitchenStation, MenuItemStation, KitchenTicket

__all__ = [
    "Base",
    "TimestampMixin",
    "as_utc",
    "Tenant",
    "Location",
    "Table",
    "Booking",
    "BookingTable",
    "MenuItem",
    "MenuModifier",
    "Order",
    "OrderItem",
    "KitchenStation",
    "MenuItemStation",
    "KitchenTicket",
]
