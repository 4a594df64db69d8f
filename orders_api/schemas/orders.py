"""
Request and response models for the order workflow.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel

from orders_api.models import OrderStatus


class CreateOrderLineRequest(BaseModel):
    product_id: int
    quantity: int


class CreateOrderRequest(BaseModel):
    """
    Shape only. Business rules (positive ids, non-empty lines, quantity
    bounds) are checked by CreateOrderRequestValidator so that violations
    come back as a Validation result rather than a parsing error.
    """
    customer_id: int
    lines: List[CreateOrderLineRequest] = []
    discount_percent: Optional[Decimal] = None


class UpdateOrderStatusBody(BaseModel):
    """Body of PATCH /orders/{id}/status; the token travels in If-Match."""
    status: OrderStatus


class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatus
    row_version: Optional[bytes] = None   # Expected concurrency token


class OrderFilters(BaseModel):
    status: Optional[OrderStatus] = None
    customer_id: Optional[int] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    page: int = 1
    page_size: int = 10
    sort: Optional[str] = None          # e.g. "total_desc", "createdAt"


class OrderLineResponse(BaseModel):
    product_id: int
    quantity: int
    unit_price: Decimal


class OrderResponse(BaseModel):
    """Wire shape of an order; row_version is the base64 entity tag."""
    id: int
    customer_id: int
    status: str
    subtotal: Decimal
    total: Decimal
    discount_percent: Optional[Decimal] = None
    created_at: datetime
    row_version: str
    lines: List[OrderLineResponse] = []
