# venue_booking/routes/v1/bookings.py
"""
Booking routes - API v1

Versioned booking endpoints under /api/v1/bookings.
All business logic delegated to BookingService.

Endpoints:
    POST / - Request a booking
    GET / - List bookings (filters: venue_id, customer_id, status)
    GET /{booking_id} - Booking details
    POST /{booking_id}/confirm - Confirm a pending booking
    POST /{booking_id}/decline - Decline a pending booking
    POST /{booking_id}/cancel - Cancel a confirmed booking
    POST /{booking_id}/seat - Mark a confirmed booking as seated
    POST /{booking_id}/no-show - Mark a confirmed booking as no-show
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from ...api.dependencies import get_booking_service
from ...core.enums import BookingStatus
from ...schemas.booking import (
    BookingCancelRequest,
    BookingCreate,
    BookingDecisionRequest,
    BookingFilters,
    BookingRead,
)
from ...services.booking_service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bookings-v1"])


@router.post("", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreate,
    service: BookingService = Depends(get_booking_service),
) -> BookingRead:
    return await service.create_booking(payload)


@router.get("", response_model=List[BookingRead])
async def list_bookings(
    venue_id: Optional[str] = Query(None),
    customer_id: Optional[str] = Query(None),
    booking_status: Optional[BookingStatus] = Query(None, alias="status"),
    service: BookingService = Depends(get_booking_service),
) -> List[BookingRead]:
    filters = BookingFilters(venue_id=venue_id, customer_id=customer_id, status=booking_status)
    return await service.list_bookings(filters)


@router.get("/{booking_id}", response_model=BookingRead)
async def get_booking(
    booking_id: str,
    service: BookingService = Depends(get_booking_service),
) -> BookingRead:
    return await service.get_booking(booking_id)


@router.post("/{booking_id}/confirm", response_model=BookingRead)
async def confirm_booking(
    booking_id: str,
    payload: BookingDecisionRequest,
    service: BookingService = Depends(get_booking_service),
) -> BookingRead:
    return await service.confirm_booking(booking_id, payload.actor, payload.note)


@router.post("/{booking_id}/decline", response_model=BookingRead)
async def decline_booking(
    booking_id: str,
    payload: BookingDecisionRequest,
    service: BookingService = Depends(get_booking_service),
) -> BookingRead:
    return await service.decline_booking(booking_id, payload.actor, payload.note)


@router.post("/{booking_id}/cancel", response_model=BookingRead)
async def cancel_booking(
    booking_id: str,
    payload: Optional[BookingCancelRequest] = Body(None),
    service: BookingService = Depends(get_booking_service),
) -> BookingRead:
    payload = payload or BookingCancelRequest()
    return await service.cancel_booking(booking_id, payload.actor, payload.reason)


@router.post("/{booking_id}/seat", response_model=BookingRead)
async def mark_seated(
    booking_id: str,
    payload: BookingDecisionRequest,
    service: BookingService = Depends(get_booking_service),
) -> BookingRead:
    return await service.mark_seated(booking_id, payload.actor, payload.note)


@router.post("/{booking_id}/no-show", response_model=BookingRead)
async def mark_no_show(
    booking_id: str,
    payload: BookingDecisionRequest,
    service: BookingService = Depends(get_booking_service),
) -> BookingRead:
    return await service.mark_no_show(booking_id, payload.actor, payload.note)
