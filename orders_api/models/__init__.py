"""
SQLAlchemy Models for the Orders API.

This package is organized by domain:
- base.py: Base class and mixins
- customer.py: Customer model
- product.py: Product model
- order.py: Order, OrderLine and the OrderStatus state names

Relations are plain foreign-key columns; related rows are loaded
explicitly per query rather than through bidirectional navigation.
"""

# Base
from orders_api.models.base import Base, IdMixin, CreatedAtMixin, UTCDateTime, utc_now

# Domain models
from orders_api.models.customer import Customer
from orders_api.models.product import Product
from orders_api.models.order import Order, OrderLine, OrderStatus, STATUS_ORDER


__all__ = [
    # Base
    "Base",
    "IdMixin",
    "CreatedAtMixin",
    "UTCDateTime",
    "utc_now",

    # Domain
    "Customer",
    "Product",
    "Order",
    "OrderLine",
    "OrderStatus",
    "STATUS_ORDER",
]
