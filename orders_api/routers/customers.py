"""
Customers API Router.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response

from orders_api.config import get_settings
from orders_api.limiter import limiter
from orders_api.routers.dependencies import error_response, get_customer_service
from orders_api.schemas.customers import CreateCustomerRequest, CustomerResponse, UpdateCustomerRequest
from orders_api.services import CustomerService

router = APIRouter()
settings = get_settings()


@router.get("", response_model=List[CustomerResponse])
@limiter.limit(settings.DEFAULT_RATE_LIMIT)
async def list_customers(request: Request, service: CustomerService = Depends(get_customer_service)):
    result = await service.get_all()
    return result.value if result.is_success else error_response(result)


@router.get("/{customer_id}", response_model=CustomerResponse, name="get_customer_by_id")
@limiter.limit(settings.DEFAULT_RATE_LIMIT)
async def get_customer(
    request: Request,
    customer_id: int,
    service: CustomerService = Depends(get_customer_service),
):
    result = await service.get_by_id(customer_id)
    return result.value if result.is_success else error_response(result)


@router.post("", response_model=CustomerResponse, status_code=201)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def create_customer(
    request: Request,
    response: Response,
    body: CreateCustomerRequest,
    service: CustomerService = Depends(get_customer_service),
):
    result = await service.create(body)
    if not result.is_success:
        return error_response(result)

    response.headers["Location"] = str(request.url_for("get_customer_by_id", customer_id=result.value.id))
    return result.value


@router.put("/{customer_id}", status_code=204)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def update_customer(
    request: Request,
    customer_id: int,
    body: UpdateCustomerRequest,
    service: CustomerService = Depends(get_customer_service),
):
    result = await service.update(customer_id, body)
    return Response(status_code=204) if result.is_success else error_response(result)


@router.delete("/{customer_id}", status_code=204)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def delete_customer(
    request: Request,
    customer_id: int,
    service: CustomerService = Depends(get_customer_service),
):
    result = await service.delete(customer_id)
    return Response(status_code=204) if result.is_success else error_response(result)
