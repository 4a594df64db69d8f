from decimal import Decimal

from pydantic import BaseModel


class CreateProductRequest(BaseModel):
    sku: str = ""
    name: str = ""
    price: Decimal = Decimal("0")
    is_active: bool = True


class UpdateProductRequest(BaseModel):
    sku: str = ""
    name: str = ""
    price: Decimal = Decimal("0")
    is_active: bool = True


class ProductResponse(BaseModel):
    """Response model for products."""
    id: int
    sku: str
    name: str
    price: Decimal
    is_active: bool

    class Config:
        from_attributes = True
