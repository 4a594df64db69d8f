from datetime import datetime

from pydantic import BaseModel


class CreateCustomerRequest(BaseModel):
    name: str = ""
    email: str = ""


class UpdateCustomerRequest(BaseModel):
    name: str = ""
    email: str = ""


class CustomerResponse(BaseModel):
    """Response model for customers."""
    id: int
    name: str
    email: str
    created_at: datetime

    class Config:
        from_attributes = True
