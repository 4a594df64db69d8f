from orders_api.validators.base import RequestValidator
from orders_api.validators.orders import CreateOrderRequestValidator
from orders_api.validators.customers import CreateCustomerRequestValidator, UpdateCustomerRequestValidator
from orders_api.validators.products import CreateProductRequestValidator, UpdateProductRequestValidator

__all__ = [
    "RequestValidator",
    "CreateOrderRequestValidator",
    "CreateCustomerRequestValidator",
    "UpdateCustomerRequestValidator",
    "CreateProductRequestValidator",
    "UpdateProductRequestValidator",
]
