"""
Tests for demo data seeding.
"""

import pytest
from sqlalchemy import func, select

from orders_api.models import Customer, Product
from orders_api.seed import seed_database


@pytest.mark.asyncio
async def test_seed_fills_empty_database(session_factory):
    assert await seed_database(session_factory) is True

    async with session_factory() as session:
        assert await session.scalar(select(func.count(Customer.id))) == 3
        products = (await session.scalars(select(Product).order_by(Product.id))).all()

    assert len(products) == 5
    assert [p.sku for p in products if not p.is_active] == ["HEADSET-005"]


@pytest.mark.asyncio
async def test_seed_skips_populated_database(session_factory, catalogue):
    assert await seed_database(session_factory) is False

    async with session_factory() as session:
        assert await session.scalar(select(func.count(Product.id))) == 3
