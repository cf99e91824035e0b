"""
HTTP surface for bookings and venues.

Error mapping runs against a stubbed service; the flow tests run the real
services on the test SQLite session through ``httpx.AsyncClient``.
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

from fastapi.testclient import TestClient
import httpx
import pytest

from venue_booking.api.dependencies import get_booking_service, get_db, get_versioned_cache
from venue_booking.core.enums import ErrorKind
from venue_booking.core.exceptions import (
    CapacityExceededException,
    InvalidStateException,
    NotFoundException,
    RepositoryException,
    SlotConflictException,
    ValidationException,
)
from venue_booking.main import app
from venue_booking.routes.errors import STATUS_BY_KIND

BOOKING_BODY = {
    "venue_id": "01VENUE",
    "customer_id": "01CUSTOMER",
    "start_utc": "2026-09-01T19:00:00Z",
    "end_utc": "2026-09-01T20:30:00Z",
    "party_size": 4,
}


@pytest.fixture
def stub_service():
    service = SimpleNamespace(create_booking=AsyncMock(), confirm_booking=AsyncMock())
    app.dependency_overrides[get_booking_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


def test_every_error_kind_has_a_status():
    assert set(STATUS_BY_KIND) == set(ErrorKind)


@pytest.mark.parametrize(
    "exc,status_code,code",
    [
        (ValidationException("End time must be after start time"), 400, "INVALID_ARGUMENT"),
        (NotFoundException("Venue", "01VENUE"), 404, "NOT_FOUND"),
        (CapacityExceededException(12, 10), 422, "CAPACITY_EXCEEDED"),
        (SlotConflictException(details={"conflicting_booking_ids": ["01B"]}), 409, "SLOT_CONFLICT"),
    ],
)
def test_domain_errors_map_to_status_codes(stub_service, exc, status_code, code):
    stub_service.create_booking.side_effect = exc
    client = TestClient(app)

    response = client.post("/api/v1/bookings", json=BOOKING_BODY)

    assert response.status_code == status_code
    body = response.json()
    assert body["code"] == code
    assert body["detail"] == exc.message
    assert body["instance"] == "/api/v1/bookings"


def test_invalid_state_is_a_conflict(stub_service):
    stub_service.confirm_booking.side_effect = InvalidStateException("CONFIRMED", "confirm")
    client = TestClient(app)

    response = client.post("/api/v1/bookings/01B/confirm", json={"actor": "host"})

    assert response.status_code == 409
    assert response.json()["errors"] == {"current_status": "CONFIRMED", "action": "confirm"}


def test_persistence_errors_are_generic(stub_service):
    stub_service.create_booking.side_effect = RepositoryException(
        "Failed to create Booking: relation bookings does not exist"
    )
    client = TestClient(app)

    response = client.post("/api/v1/bookings", json=BOOKING_BODY)

    assert response.status_code == 500
    assert response.json()["detail"] == "The request could not be completed"
    assert "relation" not in response.text


def test_unknown_fields_are_rejected(stub_service):
    client = TestClient(app)

    response = client.post("/api/v1/bookings", json={**BOOKING_BODY, "table": 7})

    assert response.status_code == 422
    stub_service.create_booking.assert_not_awaited()


@pytest.fixture
async def api_client(db_session, cache):
    async def _override_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_db
    app.dependency_overrides[get_versioned_cache] = lambda: cache
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


async def _create_venue(client, **overrides):
    body = {"name": "Boathouse", "capacity": 10, "rules": {"slot_minutes": 60, "auto_confirm": False}}
    body.update(overrides)
    response = await client.post("/api/v1/venues", json=body)
    assert response.status_code == 201
    return response.json()


async def _create_customer(client):
    response = await client.post(
        "/api/v1/customers", json={"name": "Ada Guest", "email": "ada@example.com"}
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_request_confirm_and_reconfirm(api_client):
    venue = await _create_venue(api_client)
    customer = await _create_customer(api_client)

    created = await api_client.post(
        "/api/v1/bookings",
        json={**BOOKING_BODY, "venue_id": venue["id"], "customer_id": customer["id"]},
    )
    assert created.status_code == 201
    booking = created.json()
    assert booking["status"] == "PENDING"

    confirmed = await api_client.post(
        f"/api/v1/bookings/{booking['id']}/confirm", json={"actor": "host"}
    )
    assert confirmed.status_code == 200
    assert confirmed.json()["status"] == "CONFIRMED"

    again = await api_client.post(
        f"/api/v1/bookings/{booking['id']}/confirm", json={"actor": "host"}
    )
    assert again.status_code == 409
    assert again.json()["code"] == "INVALID_STATE"

    fetched = await api_client.get(f"/api/v1/bookings/{booking['id']}")
    assert fetched.json()["status"] == "CONFIRMED"


@pytest.mark.asyncio
async def test_conflicting_request_returns_409(api_client):
    venue = await _create_venue(api_client, rules={"slot_minutes": 60, "auto_confirm": True})
    customer = await _create_customer(api_client)
    body = {**BOOKING_BODY, "venue_id": venue["id"], "customer_id": customer["id"]}

    assert (await api_client.post("/api/v1/bookings", json=body)).status_code == 201
    clash = await api_client.post(
        "/api/v1/bookings", json={**body, "start_utc": "2026-09-01T20:00:00Z", "end_utc": "2026-09-01T21:00:00Z"}
    )

    assert clash.status_code == 409
    assert clash.json()["code"] == "SLOT_CONFLICT"


@pytest.mark.asyncio
async def test_bad_range_and_capacity(api_client):
    venue = await _create_venue(api_client)
    customer = await _create_customer(api_client)
    body = {**BOOKING_BODY, "venue_id": venue["id"], "customer_id": customer["id"]}

    backwards = await api_client.post(
        "/api/v1/bookings", json={**body, "end_utc": "2026-09-01T18:00:00Z"}
    )
    too_big = await api_client.post("/api/v1/bookings", json={**body, "party_size": 11})
    missing = await api_client.post("/api/v1/bookings", json={**body, "venue_id": "01NOPE"})

    assert backwards.status_code == 400
    assert too_big.status_code == 422
    assert too_big.json()["code"] == "CAPACITY_EXCEEDED"
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_availability_and_listing(api_client):
    venue = await _create_venue(api_client, rules={"slot_minutes": 60, "auto_confirm": True})
    customer = await _create_customer(api_client)
    await api_client.post(
        "/api/v1/bookings",
        json={
            **BOOKING_BODY,
            "venue_id": venue["id"],
            "customer_id": customer["id"],
            "start_utc": "2026-09-01T10:00:00Z",
            "end_utc": "2026-09-01T11:30:00Z",
        },
    )

    response = await api_client.get(
        f"/api/v1/venues/{venue['id']}/availability",
        params={"date": "2026-09-01", "party_size": 4},
    )
    assert response.status_code == 200
    payload = response.json()
    starts = {
        datetime.fromisoformat(slot["start"].replace("Z", "+00:00")) for slot in payload["slots"]
    }
    assert payload["is_available"] is True
    assert datetime(2026, 9, 1, 9, 0, tzinfo=timezone.utc) in starts
    assert datetime(2026, 9, 1, 11, 30, tzinfo=timezone.utc) in starts
    assert datetime(2026, 9, 1, 10, 0, tzinfo=timezone.utc) not in starts

    listed = await api_client.get("/api/v1/bookings", params={"venue_id": venue["id"]})
    assert listed.status_code == 200
    assert len(listed.json()) == 1

    bad_party = await api_client.get(
        f"/api/v1/venues/{venue['id']}/availability",
        params={"date": "2026-09-01", "party_size": 0},
    )
    assert bad_party.status_code == 400
