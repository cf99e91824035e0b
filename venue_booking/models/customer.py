# venue_booking/models/customer.py
"""Customer model. The booking core only checks that a customer exists."""

from typing import Any

from sqlalchemy import Boolean, Column, String

from ..core.ulid_helper import generate_ulid
from ..database import Base
from .types import UTCDateTime, utc_now


class Customer(Base):
    __tablename__ = "customers"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    name = Column(String(200), nullable=False)
    email = Column(String(320), nullable=False, index=True)
    phone = Column(String(40), nullable=True)
    locale = Column(String(10), nullable=False, default="en")
    marketing_opt_in = Column(Boolean, nullable=False, default=False)
    created_at = Column(UTCDateTime, nullable=False, default=utc_now)

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if self.id is None:
            self.id = generate_ulid()
        if self.locale is None:
            self.locale = "en"
        if self.marketing_opt_in is None:
            self.marketing_opt_in = False
        if self.created_at is None:
            self.created_at = utc_now()

    def __repr__(self) -> str:
        return f"<Customer {self.id}: {self.email}>"
