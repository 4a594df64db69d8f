"""
Product model - the sellable catalogue.
"""

from decimal import Decimal

from sqlalchemy import String, Boolean, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from orders_api.models.base import Base, IdMixin


class Product(Base, IdMixin):
    """
    Represents a catalogue product.
    Inactive products stay in the table so historical order lines keep
    a valid reference; they just cannot be ordered.
    """
    __tablename__ = "products"

    sku: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
