"""
Demo data for a fresh database.
"""

import logging
from datetime import timedelta
from decimal import Decimal

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from orders_api.models import Customer, Product, utc_now

logger = logging.getLogger(__name__)


async def seed_database(session_factory: async_sessionmaker[AsyncSession]) -> bool:
    """Insert demo customers and products unless either table already has rows."""
    try:
        async with session_factory.begin() as session:
            has_customers = await session.scalar(select(exists().where(Customer.id.isnot(None))))
            has_products = await session.scalar(select(exists().where(Product.id.isnot(None))))
            if has_customers or has_products:
                return False

            now = utc_now()
            customers = [
                Customer(name="John Doe", email="john.doe@example.com", created_at=now),
                Customer(name="Jane Smith", email="jane.smith@example.com", created_at=now - timedelta(days=30)),
                Customer(name="Israel Israeli", email="israel.israeli@example.com", created_at=now - timedelta(days=60)),
            ]
            products = [
                Product(sku="LAPTOP-001", name="High-Performance Laptop", price=Decimal("1299.99"), is_active=True),
                Product(sku="MOUSE-002", name="Wireless Ergonomic Mouse", price=Decimal("49.99"), is_active=True),
                Product(sku="KEYBOARD-003", name="Mechanical RGB Keyboard", price=Decimal("129.99"), is_active=True),
                Product(sku="MONITOR-004", name="27-inch 4K Monitor", price=Decimal("399.99"), is_active=True),
                Product(sku="HEADSET-005", name="Noise-Cancelling Headset", price=Decimal("89.99"), is_active=False),
            ]
            session.add_all(customers)
            session.add_all(products)
    except Exception:
        logger.exception("Error occurred while seeding the database")
        raise

    logger.info(f"Database seeded: {len(customers)} customers, {len(products)} products added")
    return True
