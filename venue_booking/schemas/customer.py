# venue_booking/schemas/customer.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from ..models.customer import Customer
from .base import StrictModel, StrictRequestModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CustomerCreate(StrictRequestModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., max_length=320, pattern=EMAIL_PATTERN)
    phone: Optional[str] = Field(None, max_length=40)
    locale: str = Field("en", min_length=2, max_length=10)
    marketing_opt_in: bool = False


class CustomerRead(StrictModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    locale: str
    marketing_opt_in: bool
    created_at: datetime


def customer_to_read(customer: Customer) -> CustomerRead:
    return CustomerRead(
        id=customer.id,
        name=customer.name,
        email=customer.email,
        phone=customer.phone,
        locale=customer.locale,
        marketing_opt_in=bool(customer.marketing_opt_in),
        created_at=customer.created_at,
    )
