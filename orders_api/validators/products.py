import re
from decimal import Decimal

from pydantic import BaseModel, field_validator

from orders_api.schemas.products import CreateProductRequest, UpdateProductRequest
from orders_api.validators.base import RequestValidator, rule_violation

SKU_PATTERN = re.compile(r"^[A-Z0-9-]+$")
MAX_PRICE = Decimal("1000000")


class ProductRules(BaseModel):
    sku: str
    name: str
    price: Decimal

    @field_validator("sku")
    @classmethod
    def sku_format(cls, value: str) -> str:
        if not value.strip():
            raise rule_violation("Sku is required.")
        if len(value) > 50:
            raise rule_violation("Sku must not exceed 50 characters.")
        if len(value) < 5:
            raise rule_violation("Sku must be at least 5 characters.")
        if not SKU_PATTERN.match(value):
            raise rule_violation("SKU must contain only uppercase letters, numbers, and hyphens.")
        return value

    @field_validator("name")
    @classmethod
    def name_length(cls, value: str) -> str:
        if not value.strip():
            raise rule_violation("Name is required.")
        if len(value) > 200:
            raise rule_violation("Name must not exceed 200 characters.")
        if len(value) < 3:
            raise rule_violation("Name must be at least 3 characters.")
        return value

    @field_validator("price")
    @classmethod
    def price_range(cls, value: Decimal) -> Decimal:
        if value <= 0:
            raise rule_violation("Price must be greater than 0.")
        if value >= MAX_PRICE:
            raise rule_violation("Price must be less than 1,000,000.")
        return value


class CreateProductRequestValidator(RequestValidator[CreateProductRequest]):
    rules = ProductRules


class UpdateProductRequestValidator(RequestValidator[UpdateProductRequest]):
    rules = ProductRules
