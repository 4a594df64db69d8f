"""
Order models - order headers and their line items.
"""

import enum
from datetime import datetime
from decimal import Decimal
from typing import Optional, List

from sqlalchemy import Enum, ForeignKey, Index, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orders_api.models.base import Base, IdMixin, UTCDateTime, utc_now


class OrderStatus(str, enum.Enum):
    PENDING = "Pending"      # Initial state
    PAID = "Paid"            # Terminal
    CANCELLED = "Cancelled"  # Terminal


# Lifecycle order, used when sorting by status
STATUS_ORDER = {
    OrderStatus.PENDING: 0,
    OrderStatus.PAID: 1,
    OrderStatus.CANCELLED: 2,
}


class Order(Base, IdMixin):
    """
    An order header.

    row_version is maintained by the ORM: every UPDATE is issued as
    ``... WHERE id = :id AND row_version = :loaded`` and bumps the value,
    which is what makes the concurrency token change on each write.
    """
    __tablename__ = "orders"

    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utc_now, nullable=False
    )
    status: Mapped[OrderStatus] = mapped_column(
        Enum(
            OrderStatus,
            name="order_status",
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=OrderStatus.PENDING,
        nullable=False,
    )
    discount_percent: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2))
    subtotal: Mapped[Decimal] = mapped_column(Numeric(18, 2), default=Decimal("0.00"), nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(18, 2), default=Decimal("0.00"), nullable=False)
    row_version: Mapped[int] = mapped_column(Integer, nullable=False)

    # Lines are loaded explicitly (selectinload); no back-reference to the order
    lines: Mapped[List["OrderLine"]] = relationship(
        "OrderLine",
        cascade="all, delete-orphan",
        order_by="OrderLine.id",
        passive_deletes=True,
        lazy="raise",
    )

    __mapper_args__ = {"version_id_col": row_version}

    __table_args__ = (
        Index("idx_order_customer", "customer_id"),
        Index("idx_order_status_created", "status", "created_at"),
    )

    @property
    def concurrency_token(self) -> bytes:
        """Opaque version stamp handed to callers for conditional updates."""
        return self.row_version.to_bytes(8, "big")


class OrderLine(Base, IdMixin):
    """A product line; unit_price is the product price captured at order time."""
    __tablename__ = "order_lines"

    order_id: Mapped[int] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"), nullable=False
    )
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="RESTRICT"), nullable=False
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    __table_args__ = (
        Index("idx_orderline_order", "order_id"),
        Index("idx_orderline_product", "product_id"),
    )
