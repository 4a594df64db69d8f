from typing import List

from pydantic import BaseModel, field_validator

from orders_api.schemas.orders import CreateOrderRequest
from orders_api.validators.base import RequestValidator, rule_violation

MAX_LINE_QUANTITY = 10_000


class CreateOrderLineRules(BaseModel):
    product_id: int
    quantity: int

    @field_validator("product_id")
    @classmethod
    def product_id_positive(cls, value: int) -> int:
        if value <= 0:
            raise rule_violation("ProductId must be greater than 0.")
        return value

    @field_validator("quantity")
    @classmethod
    def quantity_in_range(cls, value: int) -> int:
        if value <= 0:
            raise rule_violation("Quantity must be greater than 0.")
        if value >= MAX_LINE_QUANTITY:
            raise rule_violation("Quantity must not exceed 10,000.")
        return value


class CreateOrderRules(BaseModel):
    customer_id: int
    lines: List[CreateOrderLineRules]

    @field_validator("customer_id")
    @classmethod
    def customer_id_positive(cls, value: int) -> int:
        if value <= 0:
            raise rule_violation("CustomerId must be greater than 0.")
        return value

    @field_validator("lines", mode="before")
    @classmethod
    def lines_not_empty(cls, value):
        if not value:
            raise rule_violation("Order must have at least one line item.")
        return value


class CreateOrderRequestValidator(RequestValidator[CreateOrderRequest]):
    rules = CreateOrderRules
