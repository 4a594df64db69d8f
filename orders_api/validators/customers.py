import re

from pydantic import BaseModel, field_validator

from orders_api.schemas.customers import CreateCustomerRequest, UpdateCustomerRequest
from orders_api.validators.base import RequestValidator, rule_violation

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+$")


class CustomerRules(BaseModel):
    name: str
    email: str

    @field_validator("name")
    @classmethod
    def name_length(cls, value: str) -> str:
        if not value.strip():
            raise rule_violation("Name is required.")
        if len(value) > 100:
            raise rule_violation("Name must not exceed 100 characters.")
        if len(value) < 2:
            raise rule_violation("Name must be at least 2 characters.")
        return value

    @field_validator("email")
    @classmethod
    def email_format(cls, value: str) -> str:
        if not value.strip():
            raise rule_violation("Email is required.")
        if not EMAIL_PATTERN.match(value):
            raise rule_violation("Email must be a valid email address.")
        if len(value) > 255:
            raise rule_violation("Email must not exceed 255 characters.")
        return value


class CreateCustomerRequestValidator(RequestValidator[CreateCustomerRequest]):
    rules = CustomerRules


class UpdateCustomerRequestValidator(RequestValidator[UpdateCustomerRequest]):
    rules = CustomerRules
