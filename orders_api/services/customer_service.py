"""
Customer CRUD.
"""

import logging
from typing import List

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from orders_api.common import Result, ResultErrorType
from orders_api.models import Customer, Order, utc_now
from orders_api.schemas.customers import CreateCustomerRequest, CustomerResponse, UpdateCustomerRequest
from orders_api.validators.customers import CreateCustomerRequestValidator, UpdateCustomerRequestValidator

logger = logging.getLogger(__name__)


class CustomerService:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        create_validator: CreateCustomerRequestValidator,
        update_validator: UpdateCustomerRequestValidator,
    ):
        self.session_factory = session_factory
        self.create_validator = create_validator
        self.update_validator = update_validator

    async def get_all(self) -> Result[List[CustomerResponse]]:
        async with self.session_factory() as session:
            customers = (await session.scalars(select(Customer).order_by(Customer.id))).all()

        return Result.success([CustomerResponse.model_validate(c) for c in customers])

    async def get_by_id(self, customer_id: int) -> Result[CustomerResponse]:
        async with self.session_factory() as session:
            customer = await session.get(Customer, customer_id)

        if customer is None:
            return Result.failure(f"Customer with id {customer_id} not found", ResultErrorType.NOT_FOUND)

        return Result.success(CustomerResponse.model_validate(customer))

    async def create(self, request: CreateCustomerRequest) -> Result[CustomerResponse]:
        errors = self.create_validator.validate(request)
        if errors:
            return Result.failure("; ".join(errors), ResultErrorType.VALIDATION)

        try:
            async with self.session_factory.begin() as session:
                email_taken = await session.scalar(select(exists().where(Customer.email == request.email)))
                if email_taken:
                    return Result.failure(f"Email {request.email} already exists", ResultErrorType.CONFLICT)

                customer = Customer(name=request.name, email=request.email, created_at=utc_now())
                session.add(customer)
                await session.flush()
        except IntegrityError:
            # Lost the race to a concurrent insert of the same email
            logger.warning(f"Unique constraint rejected customer email {request.email}")
            return Result.failure(f"Email {request.email} already exists", ResultErrorType.CONFLICT)

        logger.info(f"Created customer {customer.id}")
        return Result.success(CustomerResponse.model_validate(customer))

    async def update(self, customer_id: int, request: UpdateCustomerRequest) -> Result[bool]:
        errors = self.update_validator.validate(request)
        if errors:
            return Result.failure("; ".join(errors), ResultErrorType.VALIDATION)

        conflict = f"Customer with email {request.email} already exists"
        try:
            async with self.session_factory.begin() as session:
                customer = await session.get(Customer, customer_id)
                if customer is None:
                    return Result.failure(f"Customer with id {customer_id} not found", ResultErrorType.NOT_FOUND)

                email_taken = await session.scalar(
                    select(exists().where(Customer.email == request.email, Customer.id != customer_id))
                )
                if email_taken:
                    return Result.failure(conflict, ResultErrorType.CONFLICT)

                customer.name = request.name
                customer.email = request.email
                await session.flush()
        except IntegrityError:
            logger.warning(f"Unique constraint rejected customer email {request.email}")
            return Result.failure(conflict, ResultErrorType.CONFLICT)

        return Result.success(True)

    async def delete(self, customer_id: int) -> Result[bool]:
        async with self.session_factory.begin() as session:
            customer = await session.get(Customer, customer_id)
            if customer is None:
                return Result.failure(f"Customer with id {customer_id} not found", ResultErrorType.NOT_FOUND)

            # orders.customer_id is ON DELETE RESTRICT
            has_orders = await session.scalar(select(exists().where(Order.customer_id == customer_id)))
            if has_orders:
                return Result.failure(
                    f"Customer with id {customer_id} has orders and cannot be deleted",
                    ResultErrorType.CONFLICT,
                )

            await session.delete(customer)

        logger.info(f"Deleted customer {customer_id}")
        return Result.success(True)
