"""
Products API Router.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response

from orders_api.config import get_settings
from orders_api.limiter import limiter
from orders_api.routers.dependencies import error_response, get_product_service
from orders_api.schemas.products import CreateProductRequest, ProductResponse, UpdateProductRequest
from orders_api.services import ProductService

router = APIRouter()
settings = get_settings()


@router.get("", response_model=List[ProductResponse])
@limiter.limit(settings.DEFAULT_RATE_LIMIT)
async def list_products(request: Request, service: ProductService = Depends(get_product_service)):
    result = await service.get_all()
    return result.value if result.is_success else error_response(result)


@router.get("/{product_id}", response_model=ProductResponse, name="get_product_by_id")
@limiter.limit(settings.DEFAULT_RATE_LIMIT)
async def get_product(
    request: Request,
    product_id: int,
    service: ProductService = Depends(get_product_service),
):
    result = await service.get_by_id(product_id)
    return result.value if result.is_success else error_response(result)


@router.post("", response_model=ProductResponse, status_code=201)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def create_product(
    request: Request,
    response: Response,
    body: CreateProductRequest,
    service: ProductService = Depends(get_product_service),
):
    result = await service.create(body)
    if not result.is_success:
        return error_response(result)

    response.headers["Location"] = str(request.url_for("get_product_by_id", product_id=result.value.id))
    return result.value


@router.put("/{product_id}", status_code=204)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def update_product(
    request: Request,
    product_id: int,
    body: UpdateProductRequest,
    service: ProductService = Depends(get_product_service),
):
    """Update a product; deactivating it keeps existing order lines intact."""
    result = await service.update(product_id, body)
    return Response(status_code=204) if result.is_success else error_response(result)


@router.delete("/{product_id}", status_code=204)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def delete_product(
    request: Request,
    product_id: int,
    service: ProductService = Depends(get_product_service),
):
    result = await service.delete(product_id)
    return Response(status_code=204) if result.is_success else error_response(result)
