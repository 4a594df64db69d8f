"""
Pydantic request/response models, one module per resource.
"""

from orders_api.schemas.orders import (
    CreateOrderLineRequest,
    CreateOrderRequest,
    UpdateOrderStatusBody,
    UpdateOrderStatusRequest,
    OrderFilters,
    OrderLineResponse,
    OrderResponse,
)
from orders_api.schemas.customers import CreateCustomerRequest, UpdateCustomerRequest, CustomerResponse
from orders_api.schemas.products import CreateProductRequest, UpdateProductRequest, ProductResponse

__all__ = [
    "CreateOrderLineRequest",
    "CreateOrderRequest",
    "UpdateOrderStatusBody",
    "UpdateOrderStatusRequest",
    "OrderFilters",
    "OrderLineResponse",
    "OrderResponse",
    "CreateCustomerRequest",
    "UpdateCustomerRequest",
    "CustomerResponse",
    "CreateProductRequest",
    "UpdateProductRequest",
    "ProductResponse",
]
