# venue_booking/repositories/customer_repository.py
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.customer import Customer
from .base_repository import BaseRepository


class CustomerRepository(BaseRepository[Customer]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Customer)
