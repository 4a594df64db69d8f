"""
Response mapping for orders.

Pure functions: ORM rows in, pydantic response models out. Also owns the
transport encoding of the concurrency token (base64, quoted as an HTTP
entity tag).
"""

import base64
import binascii
from datetime import timezone
from typing import Iterable, Optional

from orders_api.models import Order, OrderLine
from orders_api.schemas.orders import OrderLineResponse, OrderResponse


def encode_concurrency_token(token: bytes) -> str:
    return base64.b64encode(token).decode("ascii")


def decode_concurrency_token(value: str) -> bytes:
    """Inverse of encode_concurrency_token; raises ValueError on malformed input."""
    try:
        return base64.b64decode(value.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise ValueError(f"Malformed concurrency token: {value!r}") from e


def format_etag(row_version: str) -> str:
    """Quote an already-encoded token for the ETag header."""
    return f'"{row_version}"'


def parse_if_match(header: Optional[str]) -> Optional[bytes]:
    """
    Extract the expected concurrency token from an If-Match header.

    Missing header or "*" means "no precondition". Weak validators (W/"...")
    are accepted; the opaque part is the base64 token.
    """
    if header is None:
        return None

    value = header.strip()
    if not value or value == "*":
        return None

    if value.startswith("W/"):
        value = value[2:]
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        value = value[1:-1]

    return decode_concurrency_token(value)


def map_order_line(line: OrderLine) -> OrderLineResponse:
    return OrderLineResponse(
        product_id=line.product_id,
        quantity=line.quantity,
        unit_price=line.unit_price,
    )


def map_order_response(order: Order, lines: Iterable[OrderLine]) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        customer_id=order.customer_id,
        status=order.status.value,
        subtotal=order.subtotal,
        total=order.total,
        discount_percent=order.discount_percent,
        created_at=order.created_at.astimezone(timezone.utc),
        row_version=encode_concurrency_token(order.concurrency_token),
        lines=[map_order_line(line) for line in lines],
    )
