"""
Order Workflow Engine.

Creates orders (customer and product checks, price snapshot, totals,
optional discount) inside a single transaction, reads them back, lists them
with filters/sorting/paging, and moves them through the status state machine
under optimistic concurrency.

Every anticipated failure comes back as a failed Result; store errors and
bugs propagate to the caller untouched.
"""

import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, FrozenSet, List

from sqlalchemy import case, exists, func, select, Select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import StaleDataError

from orders_api.common import PagedResult, Result, ResultErrorType
from orders_api.models import Customer, Order, OrderLine, OrderStatus, Product, STATUS_ORDER, utc_now
from orders_api.schemas.orders import (
    CreateOrderRequest,
    OrderFilters,
    OrderResponse,
    UpdateOrderStatusRequest,
)
from orders_api.services.mapping import map_order_response
from orders_api.validators.orders import CreateOrderRequestValidator

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

# Pending is the only non-terminal state
ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
}

SORT_COLUMNS = {
    "id": Order.id,
    "createdat": Order.created_at,
    "total": Order.total,
    "status": case(STATUS_ORDER, value=Order.status),
}


def to_money(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def apply_discount(subtotal: Decimal, discount_percent: Decimal | None) -> Decimal:
    """
    Total after the optional discount.

    NOTE: a positive discount makes the total ``subtotal * discount / 100``
    (a 10% discount yields 10% of the subtotal, not 90%). This is the
    behaviour existing clients were built against and is kept until the
    pricing owners confirm the intended formula.
    """
    if discount_percent is not None and discount_percent > 0:
        return to_money(subtotal * (discount_percent / Decimal(100)))
    return subtotal


def apply_sorting(query: Select, sort: str | None) -> Select:
    """Order by "<field>" or "<field>_desc"; unknown fields fall back to id ascending."""
    if not sort:
        return query.order_by(Order.id)

    parts = [part for part in sort.split("_") if part]
    field = parts[0].lower() if parts else ""
    descending = len(parts) > 1 and parts[1].lower() == "desc"

    column = SORT_COLUMNS.get(field)
    if column is None:
        return query.order_by(Order.id)

    ordering = column.desc() if descending else column.asc()
    if field == "id":
        return query.order_by(ordering)
    return query.order_by(ordering, Order.id)


class OrderService:
    """
    Core service for the order lifecycle.

    Each call opens its own session from the injected factory, so there is
    no state shared between concurrent requests.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        create_validator: CreateOrderRequestValidator,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.session_factory = session_factory
        self.create_validator = create_validator
        self.clock = clock

    async def create(self, request: CreateOrderRequest) -> Result[OrderResponse]:
        errors = self.create_validator.validate(request)
        if errors:
            return Result.failure("; ".join(errors), ResultErrorType.VALIDATION)

        # One transaction for the checks and the writes; any exception
        # (including task cancellation) inside the block rolls everything back.
        try:
            async with self.session_factory.begin() as session:
                customer_exists = await session.scalar(
                    select(exists().where(Customer.id == request.customer_id))
                )
                if not customer_exists:
                    return Result.failure(
                        f"Customer with id {request.customer_id} not found",
                        ResultErrorType.VALIDATION,
                    )

                product_ids = {line.product_id for line in request.lines}
                rows = await session.scalars(select(Product).where(Product.id.in_(product_ids)))
                products = {product.id: product for product in rows}

                for line in request.lines:
                    product = products.get(line.product_id)
                    if product is None:
                        return Result.failure(
                            f"Product with id {line.product_id} not found",
                            ResultErrorType.NOT_FOUND,
                        )
                    if not product.is_active:
                        return Result.failure(
                            f"Product with id {product.id} not active",
                            ResultErrorType.VALIDATION,
                        )

                order = Order(
                    customer_id=request.customer_id,
                    created_at=self.clock(),
                    status=OrderStatus.PENDING,
                    subtotal=Decimal("0.00"),
                    total=Decimal("0.00"),
                    discount_percent=request.discount_percent,
                )
                session.add(order)
                await session.flush()

                order_lines: List[OrderLine] = []
                subtotal = Decimal("0.00")
                for line in request.lines:
                    order_line = OrderLine(
                        order_id=order.id,
                        product_id=line.product_id,
                        quantity=line.quantity,
                        unit_price=products[line.product_id].price,
                    )
                    subtotal += order_line.line_total
                    order_lines.append(order_line)

                session.add_all(order_lines)
                order.subtotal = to_money(subtotal)
                order.total = apply_discount(order.subtotal, request.discount_percent)
                await session.flush()
        except Exception:
            logger.exception(f"Failed to create order for customer {request.customer_id}; transaction rolled back")
            raise

        logger.info(
            f"Created order {order.id} for customer {order.customer_id} "
            f"({len(order_lines)} lines, total {order.total})"
        )
        return Result.success(map_order_response(order, order_lines))

    async def get_by_id(self, order_id: int) -> Result[OrderResponse]:
        async with self.session_factory() as session:
            order = await session.scalar(
                select(Order)
                .options(selectinload(Order.lines))
                .where(Order.id == order_id)
            )

        if order is None:
            return Result.failure(f"Order with id {order_id} not found", ResultErrorType.NOT_FOUND)

        return Result.success(map_order_response(order, order.lines))

    async def get_all(self, filters: OrderFilters) -> Result[PagedResult[OrderResponse]]:
        conditions = []
        if filters.status is not None:
            conditions.append(Order.status == filters.status)
        if filters.customer_id is not None:
            conditions.append(Order.customer_id == filters.customer_id)
        if filters.date_from is not None:
            conditions.append(Order.created_at >= filters.date_from)
        if filters.date_to is not None:
            conditions.append(Order.created_at <= filters.date_to)

        offset = max(filters.page - 1, 0) * filters.page_size

        async with self.session_factory() as session:
            total_count = await session.scalar(
                select(func.count(Order.id)).where(*conditions)
            ) or 0

            query = select(Order).options(selectinload(Order.lines)).where(*conditions)
            query = apply_sorting(query, filters.sort)
            query = query.offset(offset).limit(filters.page_size)

            orders = (await session.scalars(query)).all()

        page = PagedResult[OrderResponse](
            items=[map_order_response(order, order.lines) for order in orders],
            total_count=total_count,
            page=filters.page,
            page_size=filters.page_size,
        )
        return Result.success(page)

    async def update_status(self, order_id: int, request: UpdateOrderStatusRequest) -> Result[bool]:
        async with self.session_factory() as session:
            order = await session.get(Order, order_id)

            if order is None:
                return Result.failure(f"Order with id {order_id} not found", ResultErrorType.NOT_FOUND)

            if request.row_version is not None and request.row_version != order.concurrency_token:
                logger.warning(f"Rejected stale concurrency token for order {order_id}")
                return Result.failure(
                    "The order was modified by another user. Please refresh and try again.",
                    ResultErrorType.CONCURRENCY_CONFLICT,
                )

            allowed = ALLOWED_TRANSITIONS.get(order.status)
            if allowed is None:
                return Result.failure(
                    f"Order with status {order.status.value} can only transition from "
                    f"{OrderStatus.PENDING.value} status",
                    ResultErrorType.BUSINESS_RULE,
                )

            if request.status not in allowed:
                return Result.failure(
                    f"Invalid target status {request.status.value}. Only Paid or Cancelled allowed",
                    ResultErrorType.VALIDATION,
                )

            previous = order.status
            order.status = request.status
            try:
                await session.commit()
            except StaleDataError:
                # Another writer bumped row_version between our read and write
                await session.rollback()
                logger.warning(f"Concurrent update detected for order {order_id}")
                return Result.failure(
                    "The order was modified by another user. Please refresh and try again.",
                    ResultErrorType.CONCURRENCY_CONFLICT,
                )

        logger.info(f"Order {order_id} moved {previous.value} -> {request.status.value}")
        return Result.success(True)
