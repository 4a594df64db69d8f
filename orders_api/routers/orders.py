"""
Orders API Router.

Thin translation layer: HTTP in, OrderService call, Result out as a status
code. Concurrency tokens travel as ETag / If-Match headers.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query, Request, Response
from fastapi.responses import JSONResponse

from orders_api.common import PagedResult
from orders_api.config import get_settings
from orders_api.limiter import limiter
from orders_api.models import OrderStatus
from orders_api.routers.dependencies import error_response, get_order_service
from orders_api.schemas.orders import (
    CreateOrderRequest,
    OrderFilters,
    OrderResponse,
    UpdateOrderStatusBody,
    UpdateOrderStatusRequest,
)
from orders_api.services import OrderService
from orders_api.services.mapping import format_etag, parse_if_match

router = APIRouter()
settings = get_settings()


@router.post("", response_model=OrderResponse, status_code=201)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def create_order(
    request: Request,
    response: Response,
    body: CreateOrderRequest,
    service: OrderService = Depends(get_order_service),
):
    """Create an order with its lines in one transaction."""
    result = await service.create(body)
    if not result.is_success:
        return error_response(result)

    order = result.value
    response.headers["ETag"] = format_etag(order.row_version)
    response.headers["Location"] = str(request.url_for("get_order_by_id", order_id=order.id))
    return order


@router.get("", response_model=PagedResult[OrderResponse])
@limiter.limit(settings.DEFAULT_RATE_LIMIT)
async def list_orders(
    request: Request,
    status: Optional[OrderStatus] = Query(None),
    customer_id: Optional[int] = Query(None),
    date_from: Optional[datetime] = Query(None),
    date_to: Optional[datetime] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    sort: Optional[str] = Query(None, description="id, createdAt, total or status; append _desc for descending"),
    service: OrderService = Depends(get_order_service),
):
    filters = OrderFilters(
        status=status,
        customer_id=customer_id,
        date_from=date_from,
        date_to=date_to,
        page=page,
        page_size=page_size,
        sort=sort,
    )
    result = await service.get_all(filters)
    if not result.is_success:
        return error_response(result)
    return result.value


@router.get("/{order_id}", response_model=OrderResponse, name="get_order_by_id")
@limiter.limit(settings.DEFAULT_RATE_LIMIT)
async def get_order(
    request: Request,
    response: Response,
    order_id: int,
    service: OrderService = Depends(get_order_service),
):
    result = await service.get_by_id(order_id)
    if not result.is_success:
        return error_response(result)

    response.headers["ETag"] = format_etag(result.value.row_version)
    return result.value


@router.patch("/{order_id}/status", status_code=204)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def update_order_status(
    request: Request,
    order_id: int,
    body: UpdateOrderStatusBody,
    if_match: Optional[str] = Header(None, alias="If-Match"),
    service: OrderService = Depends(get_order_service),
):
    """
    Move an order out of Pending.

    Send the ETag from a previous read in If-Match to make the update
    conditional; a stale tag answers 412.
    """
    try:
        expected_row_version = parse_if_match(if_match)
    except ValueError as e:
        return JSONResponse(status_code=400, content={"message": str(e)})

    result = await service.update_status(
        order_id,
        UpdateOrderStatusRequest(status=body.status, row_version=expected_row_version),
    )
    if not result.is_success:
        return error_response(result)
    return Response(status_code=204)
