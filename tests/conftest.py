"""
Shared fixtures: an in-memory SQLite store per test, seeded catalogue rows
and ready-made services.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SEED_DATABASE", "false")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Iterable

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from orders_api.database import build_session_maker, enable_sqlite_foreign_keys
from orders_api.models import Base, Customer, Order, OrderLine, OrderStatus, Product
from orders_api.services import CustomerService, OrderService, ProductService
from orders_api.validators import (
    CreateCustomerRequestValidator,
    CreateOrderRequestValidator,
    CreateProductRequestValidator,
    UpdateCustomerRequestValidator,
    UpdateProductRequestValidator,
)

DEFAULT_CUSTOMER_ID = 1
NON_EXIST_CUSTOMER_ID = 999
DEFAULT_PRODUCT_ID_1 = 1
DEFAULT_PRODUCT_ID_2 = 2
INACTIVE_PRODUCT_ID = 3
NON_EXIST_PRODUCT_ID = 998
NON_EXIST_ORDER_ID = 997

BASE_TIME = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
async def engine():
    """Fresh in-memory database with the full schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_maker(engine)


@pytest.fixture
async def catalogue(session_factory):
    """One customer, two active products (10.00, 20.00) and one inactive product."""
    async with session_factory.begin() as session:
        session.add(Customer(id=DEFAULT_CUSTOMER_ID, name="John Doe", email="john.doe@example.com"))
        session.add_all([
            Product(id=DEFAULT_PRODUCT_ID_1, sku="PROD-001", name="Product One", price=Decimal("10.00"), is_active=True),
            Product(id=DEFAULT_PRODUCT_ID_2, sku="PROD-002", name="Product Two", price=Decimal("20.00"), is_active=True),
            Product(id=INACTIVE_PRODUCT_ID, sku="PROD-003", name="Retired Product", price=Decimal("15.00"), is_active=False),
        ])


@pytest.fixture
def order_service(session_factory):
    return OrderService(session_factory, CreateOrderRequestValidator())


@pytest.fixture
def customer_service(session_factory):
    return CustomerService(session_factory, CreateCustomerRequestValidator(), UpdateCustomerRequestValidator())


@pytest.fixture
def product_service(session_factory):
    return ProductService(session_factory, CreateProductRequestValidator(), UpdateProductRequestValidator())


async def seed_orders(session_factory, statuses: Iterable[OrderStatus], totals: Iterable[Decimal] = None):
    """
    Insert orders with ids 1..N for the default customer, one day apart
    starting at BASE_TIME, each with a single line for product 1.
    """
    statuses = list(statuses)
    totals = list(totals) if totals is not None else [Decimal(10 * (i + 1)) for i in range(len(statuses))]

    async with session_factory.begin() as session:
        for index, (status, total) in enumerate(zip(statuses, totals), start=1):
            session.add(Order(
                id=index,
                customer_id=DEFAULT_CUSTOMER_ID,
                status=status,
                created_at=BASE_TIME + timedelta(days=index - 1),
                subtotal=total,
                total=total,
            ))
        await session.flush()
        for index, total in enumerate(totals, start=1):
            session.add(OrderLine(
                order_id=index,
                product_id=DEFAULT_PRODUCT_ID_1,
                quantity=1,
                unit_price=total,
            ))
