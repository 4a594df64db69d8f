"""
Product CRUD.

Products referenced by order lines can be deactivated but not deleted, so
historical lines always point at a real product.
"""

import logging
from typing import List

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from orders_api.common import Result, ResultErrorType
from orders_api.models import OrderLine, Product
from orders_api.schemas.products import CreateProductRequest, ProductResponse, UpdateProductRequest
from orders_api.validators.products import CreateProductRequestValidator, UpdateProductRequestValidator

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        create_validator: CreateProductRequestValidator,
        update_validator: UpdateProductRequestValidator,
    ):
        self.session_factory = session_factory
        self.create_validator = create_validator
        self.update_validator = update_validator

    async def get_all(self) -> Result[List[ProductResponse]]:
        async with self.session_factory() as session:
            products = (await session.scalars(select(Product).order_by(Product.id))).all()

        return Result.success([ProductResponse.model_validate(p) for p in products])

    async def get_by_id(self, product_id: int) -> Result[ProductResponse]:
        async with self.session_factory() as session:
            product = await session.get(Product, product_id)

        if product is None:
            return Result.failure(f"Product with id {product_id} was not found", ResultErrorType.NOT_FOUND)

        return Result.success(ProductResponse.model_validate(product))

    async def create(self, request: CreateProductRequest) -> Result[ProductResponse]:
        errors = self.create_validator.validate(request)
        if errors:
            return Result.failure("; ".join(errors), ResultErrorType.VALIDATION)

        conflict = f"Product with SKU {request.sku} already exists"
        try:
            async with self.session_factory.begin() as session:
                sku_taken = await session.scalar(select(exists().where(Product.sku == request.sku)))
                if sku_taken:
                    return Result.failure(conflict, ResultErrorType.CONFLICT)

                product = Product(
                    sku=request.sku,
                    name=request.name,
                    price=request.price,
                    is_active=request.is_active,
                )
                session.add(product)
                await session.flush()
        except IntegrityError:
            # Lost the race to a concurrent insert of the same SKU
            logger.warning(f"Unique constraint rejected product SKU {request.sku}")
            return Result.failure(conflict, ResultErrorType.CONFLICT)

        logger.info(f"Created product {product.id} ({product.sku})")
        return Result.success(ProductResponse.model_validate(product))

    async def update(self, product_id: int, request: UpdateProductRequest) -> Result[bool]:
        errors = self.update_validator.validate(request)
        if errors:
            return Result.failure("; ".join(errors), ResultErrorType.VALIDATION)

        conflict = f"Product with SKU {request.sku} already exists"
        try:
            async with self.session_factory.begin() as session:
                product = await session.get(Product, product_id)
                if product is None:
                    return Result.failure(f"Product with id {product_id} was not found", ResultErrorType.NOT_FOUND)

                sku_taken = await session.scalar(
                    select(exists().where(Product.sku == request.sku, Product.id != product_id))
                )
                if sku_taken:
                    return Result.failure(conflict, ResultErrorType.CONFLICT)

                # Existing order lines keep their captured unit_price
                product.sku = request.sku
                product.name = request.name
                product.price = request.price
                product.is_active = request.is_active
                await session.flush()
        except IntegrityError:
            logger.warning(f"Unique constraint rejected product SKU {request.sku}")
            return Result.failure(conflict, ResultErrorType.CONFLICT)

        return Result.success(True)

    async def delete(self, product_id: int) -> Result[bool]:
        async with self.session_factory.begin() as session:
            product = await session.get(Product, product_id)
            if product is None:
                return Result.failure(f"Product with id {product_id} was not found", ResultErrorType.NOT_FOUND)

            referenced = await session.scalar(select(exists().where(OrderLine.product_id == product_id)))
            if referenced:
                return Result.failure(
                    f"Product with id {product_id} is referenced by existing orders; deactivate it instead",
                    ResultErrorType.CONFLICT,
                )

            await session.delete(product)

        logger.info(f"Deleted product {product_id}")
        return Result.success(True)
