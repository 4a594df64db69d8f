"""
Router Dependencies
====================

FastAPI providers that assemble services from their collaborators, plus
the translation of failed Results into HTTP responses.
"""

from fastapi import Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from orders_api.common import Result, ResultErrorType
from orders_api.database import get_session_maker
from orders_api.services import CustomerService, OrderService, ProductService
from orders_api.validators import (
    CreateCustomerRequestValidator,
    CreateOrderRequestValidator,
    CreateProductRequestValidator,
    UpdateCustomerRequestValidator,
    UpdateProductRequestValidator,
)

ERROR_STATUS_CODES = {
    ResultErrorType.NOT_FOUND: 404,
    ResultErrorType.VALIDATION: 400,
    ResultErrorType.BUSINESS_RULE: 400,
    ResultErrorType.CONFLICT: 409,
    ResultErrorType.CONCURRENCY_CONFLICT: 412,
}


def get_order_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_maker),
) -> OrderService:
    return OrderService(session_factory, CreateOrderRequestValidator())


def get_customer_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_maker),
) -> CustomerService:
    return CustomerService(session_factory, CreateCustomerRequestValidator(), UpdateCustomerRequestValidator())


def get_product_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_maker),
) -> ProductService:
    return ProductService(session_factory, CreateProductRequestValidator(), UpdateProductRequestValidator())


def error_response(result: Result) -> JSONResponse:
    """Map a failed Result to a JSON error body with the matching status code."""
    status_code = ERROR_STATUS_CODES.get(result.error_type, 500)
    return JSONResponse(status_code=status_code, content={"message": result.error})
