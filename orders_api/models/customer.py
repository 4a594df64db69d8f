"""
Customer model - people who place orders.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from orders_api.models.base import Base, IdMixin, CreatedAtMixin


class Customer(Base, IdMixin, CreatedAtMixin):
    """A customer; orders reference it by customer_id."""
    __tablename__ = "customers"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
