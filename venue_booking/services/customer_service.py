# venue_booking/services/customer_service.py
"""Customer Service: customers are the people who request bookings."""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import NotFoundException
from ..repositories.customer_repository import CustomerRepository
from ..repositories.factory import RepositoryFactory
from ..schemas.customer import CustomerCreate, CustomerRead, customer_to_read
from .base import BaseService

logger = logging.getLogger(__name__)


class CustomerService(BaseService):
    def __init__(
        self,
        db: AsyncSession,
        customer_repository: Optional[CustomerRepository] = None,
    ):
        super().__init__(db)
        self.customer_repository = (
            customer_repository or RepositoryFactory.create_customer_repository(db)
        )

    @BaseService.measure_operation("create_customer")
    async def create_customer(self, data: CustomerCreate) -> CustomerRead:
        async with self.transaction():
            customer = await self.customer_repository.create(**data.model_dump())
        self.log_operation("create_customer", customer_id=customer.id)
        return customer_to_read(customer)

    @BaseService.measure_operation("get_customer")
    async def get_customer(self, customer_id: str) -> CustomerRead:
        customer = await self.customer_repository.get_by_id(customer_id)
        if customer is None:
            raise NotFoundException("Customer", customer_id)
        return customer_to_read(customer)
