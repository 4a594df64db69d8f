"""
Application services. Each one receives its session factory and validators
through the constructor and returns Result values.
"""

from orders_api.services.order_service import OrderService
from orders_api.services.customer_service import CustomerService
from orders_api.services.product_service import ProductService

__all__ = ["OrderService", "CustomerService", "ProductService"]
