# venue_booking/routes/v1/venues.py
"""
Venue routes - API v1

Endpoints:
    GET / - List venues
    POST / - Create a venue
    GET /{venue_id} - Venue details
    PUT /{venue_id} - Update a venue
    DELETE /{venue_id} - Delete a venue
    GET /{venue_id}/availability - Free slots for a date and party size
"""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from ...api.dependencies import get_booking_service, get_venue_service
from ...schemas.availability import AvailabilityRead
from ...schemas.venue import VenueCreate, VenueRead, VenueUpdate
from ...services.booking_service import BookingService
from ...services.venue_service import VenueService

router = APIRouter(tags=["venues-v1"])


@router.get("", response_model=List[VenueRead])
async def list_venues(service: VenueService = Depends(get_venue_service)) -> List[VenueRead]:
    return await service.list_venues()


@router.post("", response_model=VenueRead, status_code=status.HTTP_201_CREATED)
async def create_venue(
    payload: VenueCreate,
    service: VenueService = Depends(get_venue_service),
) -> VenueRead:
    return await service.create_venue(payload)


@router.get("/{venue_id}", response_model=VenueRead)
async def get_venue(
    venue_id: str,
    service: VenueService = Depends(get_venue_service),
) -> VenueRead:
    return await service.get_venue(venue_id)


@router.put("/{venue_id}", response_model=VenueRead)
async def update_venue(
    venue_id: str,
    payload: VenueUpdate,
    service: VenueService = Depends(get_venue_service),
) -> VenueRead:
    return await service.update_venue(venue_id, payload)


@router.delete("/{venue_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_venue(
    venue_id: str,
    service: VenueService = Depends(get_venue_service),
) -> Response:
    await service.delete_venue(venue_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{venue_id}/availability", response_model=AvailabilityRead)
async def check_availability(
    venue_id: str,
    day: date = Query(..., alias="date", description="UTC date, YYYY-MM-DD"),
    party_size: int = Query(...),
    service: BookingService = Depends(get_booking_service),
) -> AvailabilityRead:
    return await service.check_availability(venue_id, day, party_size)
