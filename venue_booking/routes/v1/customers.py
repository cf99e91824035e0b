# venue_booking/routes/v1/customers.py
from fastapi import APIRouter, Depends, status

from ...api.dependencies import get_customer_service
from ...schemas.customer import CustomerCreate, CustomerRead
from ...services.customer_service import CustomerService

router = APIRouter(tags=["customers-v1"])


@router.post("", response_model=CustomerRead, status_code=status.HTTP_201_CREATED)
async def create_customer(
    payload: CustomerCreate,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerRead:
    return await service.create_customer(payload)


@router.get("/{customer_id}", response_model=CustomerRead)
async def get_customer(
    customer_id: str,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerRead:
    return await service.get_customer(customer_id)
