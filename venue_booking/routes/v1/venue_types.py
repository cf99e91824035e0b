# venue_booking/routes/v1/venue_types.py
"""
Venue type routes - API v1

Endpoints:
    GET / - List venue types in display order
    POST / - Create a venue type
    GET /{venue_type_id} - Venue type details
    PUT /{venue_type_id} - Replace a venue type
    DELETE /{venue_type_id} - Delete a venue type and detach its venues
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ...api.dependencies import get_venue_type_service
from ...schemas.venue_type import VenueTypeCreate, VenueTypeRead, VenueTypeUpdate
from ...services.venue_type_service import VenueTypeService

router = APIRouter(tags=["venue-types-v1"])


@router.get("", response_model=List[VenueTypeRead])
async def list_venue_types(
    service: VenueTypeService = Depends(get_venue_type_service),
) -> List[VenueTypeRead]:
    return await service.list_venue_types()


@router.post("", response_model=VenueTypeRead, status_code=status.HTTP_201_CREATED)
async def create_venue_type(
    payload: VenueTypeCreate,
    service: VenueTypeService = Depends(get_venue_type_service),
) -> VenueTypeRead:
    return await service.create_venue_type(payload)


@router.get("/{venue_type_id}", response_model=VenueTypeRead)
async def get_venue_type(
    venue_type_id: str,
    service: VenueTypeService = Depends(get_venue_type_service),
) -> VenueTypeRead:
    return await service.get_venue_type(venue_type_id)


@router.put("/{venue_type_id}", response_model=VenueTypeRead)
async def update_venue_type(
    venue_type_id: str,
    payload: VenueTypeUpdate,
    service: VenueTypeService = Depends(get_venue_type_service),
) -> VenueTypeRead:
    return await service.update_venue_type(venue_type_id, payload)


@router.delete("/{venue_type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_venue_type(
    venue_type_id: str,
    service: VenueTypeService = Depends(get_venue_type_service),
) -> Response:
    await service.delete_venue_type(venue_type_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
