"""
Tests for customer and product CRUD services.
"""

from decimal import Decimal
from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from orders_api.common import ResultErrorType
from orders_api.models import OrderStatus
from orders_api.schemas.customers import CreateCustomerRequest, UpdateCustomerRequest
from orders_api.schemas.products import CreateProductRequest, UpdateProductRequest

from conftest import DEFAULT_CUSTOMER_ID, DEFAULT_PRODUCT_ID_1, DEFAULT_PRODUCT_ID_2, seed_orders


# ---------------------------------------------------------------------------
# customers
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_and_fetch_customer(customer_service):
    created = await customer_service.create(CreateCustomerRequest(name="Jane Smith", email="jane@example.com"))

    assert created.is_success
    fetched = await customer_service.get_by_id(created.value.id)
    assert fetched.value.email == "jane@example.com"

    listed = await customer_service.get_all()
    assert [c.id for c in listed.value] == [created.value.id]


@pytest.mark.asyncio
async def test_duplicate_customer_email_is_a_conflict(customer_service, catalogue):
    result = await customer_service.create(CreateCustomerRequest(name="Another John", email="john.doe@example.com"))

    assert result.error_type == ResultErrorType.CONFLICT
    assert "john.doe@example.com" in result.error


@pytest.mark.asyncio
async def test_invalid_customer_is_a_validation_error(customer_service):
    result = await customer_service.create(CreateCustomerRequest(name="J", email="jane@example.com"))

    assert result.error_type == ResultErrorType.VALIDATION
    assert result.error == "Name must be at least 2 characters."


@pytest.mark.asyncio
async def test_update_customer(customer_service, catalogue):
    result = await customer_service.update(
        DEFAULT_CUSTOMER_ID, UpdateCustomerRequest(name="John Q. Doe", email="jqd@example.com")
    )

    assert result.is_success
    assert (await customer_service.get_by_id(DEFAULT_CUSTOMER_ID)).value.name == "John Q. Doe"


@pytest.mark.asyncio
async def test_update_customer_to_taken_email_is_a_conflict(customer_service, catalogue):
    other = (await customer_service.create(CreateCustomerRequest(name="Jane Smith", email="jane@example.com"))).value

    result = await customer_service.update(
        other.id, UpdateCustomerRequest(name="Jane Smith", email="john.doe@example.com")
    )

    assert result.error_type == ResultErrorType.CONFLICT


@pytest.mark.asyncio
async def test_unknown_customer_is_not_found(customer_service):
    assert (await customer_service.get_by_id(404)).error_type == ResultErrorType.NOT_FOUND
    assert (await customer_service.delete(404)).error_type == ResultErrorType.NOT_FOUND


@pytest.mark.asyncio
async def test_customer_with_orders_cannot_be_deleted(customer_service, session_factory, catalogue):
    await seed_orders(session_factory, [OrderStatus.PENDING])

    result = await customer_service.delete(DEFAULT_CUSTOMER_ID)

    assert result.error_type == ResultErrorType.CONFLICT
    assert (await customer_service.get_by_id(DEFAULT_CUSTOMER_ID)).is_success


@pytest.mark.asyncio
async def test_customer_without_orders_is_deleted(customer_service, catalogue):
    assert (await customer_service.delete(DEFAULT_CUSTOMER_ID)).is_success
    assert (await customer_service.get_by_id(DEFAULT_CUSTOMER_ID)).error_type == ResultErrorType.NOT_FOUND


# ---------------------------------------------------------------------------
# products
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_product(product_service):
    result = await product_service.create(
        CreateProductRequest(sku="LAPTOP-001", name="Laptop", price=Decimal("1299.99"))
    )

    assert result.is_success
    assert result.value.price == Decimal("1299.99")
    assert result.value.is_active is True


@pytest.mark.asyncio
async def test_duplicate_sku_is_a_conflict(product_service, catalogue):
    result = await product_service.create(
        CreateProductRequest(sku="PROD-001", name="Duplicate", price=Decimal("5.00"))
    )

    assert result.error_type == ResultErrorType.CONFLICT
    assert "PROD-001" in result.error


@pytest.mark.asyncio
async def test_deactivate_product(product_service, catalogue):
    result = await product_service.update(
        DEFAULT_PRODUCT_ID_2,
        UpdateProductRequest(sku="PROD-002", name="Product Two", price=Decimal("20.00"), is_active=False),
    )

    assert result.is_success
    assert (await product_service.get_by_id(DEFAULT_PRODUCT_ID_2)).value.is_active is False


@pytest.mark.asyncio
async def test_update_product_to_taken_sku_is_a_conflict(product_service, catalogue):
    result = await product_service.update(
        DEFAULT_PRODUCT_ID_2,
        UpdateProductRequest(sku="PROD-001", name="Product Two", price=Decimal("20.00")),
    )

    assert result.error_type == ResultErrorType.CONFLICT


@pytest.mark.asyncio
async def test_product_on_an_order_cannot_be_deleted(product_service, session_factory, catalogue):
    await seed_orders(session_factory, [OrderStatus.PAID])

    result = await product_service.delete(DEFAULT_PRODUCT_ID_1)

    assert result.error_type == ResultErrorType.CONFLICT
    assert "deactivate" in result.error


@pytest.mark.asyncio
async def test_unreferenced_product_is_deleted(product_service, catalogue):
    assert (await product_service.delete(DEFAULT_PRODUCT_ID_2)).is_success

    missing = await product_service.get_by_id(DEFAULT_PRODUCT_ID_2)
    assert missing.error_type == ResultErrorType.NOT_FOUND
    assert missing.error == f"Product with id {DEFAULT_PRODUCT_ID_2} was not found"


# ---------------------------------------------------------------------------
# unique constraint races
# ---------------------------------------------------------------------------

def unique_violation(table: str, column: str) -> IntegrityError:
    return IntegrityError(
        f"INSERT INTO {table}", {}, Exception(f"UNIQUE constraint failed: {table}.{column}")
    )


@pytest.mark.asyncio
async def test_concurrent_customer_insert_is_a_conflict(customer_service, session_factory):
    """The exists() check passed but a concurrent insert took the email first."""
    with patch.object(AsyncSession, "flush", side_effect=unique_violation("customers", "email")):
        result = await customer_service.create(CreateCustomerRequest(name="Jane Smith", email="jane@example.com"))

    assert result.error_type == ResultErrorType.CONFLICT
    assert "jane@example.com" in result.error
    assert (await customer_service.get_all()).value == []


@pytest.mark.asyncio
async def test_concurrent_customer_update_is_a_conflict(customer_service, catalogue):
    with patch.object(AsyncSession, "flush", side_effect=unique_violation("customers", "email")):
        result = await customer_service.update(
            DEFAULT_CUSTOMER_ID, UpdateCustomerRequest(name="John Doe", email="taken@example.com")
        )

    assert result.error_type == ResultErrorType.CONFLICT
    assert (await customer_service.get_by_id(DEFAULT_CUSTOMER_ID)).value.email == "john.doe@example.com"


@pytest.mark.asyncio
async def test_concurrent_product_insert_is_a_conflict(product_service):
    with patch.object(AsyncSession, "flush", side_effect=unique_violation("products", "sku")):
        result = await product_service.create(
            CreateProductRequest(sku="LAPTOP-001", name="Laptop", price=Decimal("1299.99"))
        )

    assert result.error_type == ResultErrorType.CONFLICT
    assert "LAPTOP-001" in result.error
    assert (await product_service.get_all()).value == []


@pytest.mark.asyncio
async def test_concurrent_product_update_is_a_conflict(product_service, catalogue):
    with patch.object(AsyncSession, "flush", side_effect=unique_violation("products", "sku")):
        result = await product_service.update(
            DEFAULT_PRODUCT_ID_2,
            UpdateProductRequest(sku="PROD-999", name="Product Two", price=Decimal("20.00")),
        )

    assert result.error_type == ResultErrorType.CONFLICT
    assert (await product_service.get_by_id(DEFAULT_PRODUCT_ID_2)).value.sku == "PROD-002"
