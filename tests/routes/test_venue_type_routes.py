import httpx
import pytest

from venue_booking.api.dependencies import get_db, get_versioned_cache
from venue_booking.main import app


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


@pytest.mark.asyncio
async def test_venue_type_crud(api_client):
    created = await api_client.post(
        "/api/v1/venue-types", json={"name": "Rooftop", "description": "Open air"}
    )
    assert created.status_code == 201
    venue_type = created.json()
    assert venue_type["display_order"] == 0

    replaced = await api_client.put(
        f"/api/v1/venue-types/{venue_type['id']}", json={"name": "Terrace", "display_order": 4}
    )
    assert replaced.status_code == 200
    assert replaced.json()["name"] == "Terrace"

    listed = await api_client.get("/api/v1/venue-types")
    assert [vt["name"] for vt in listed.json()] == ["Terrace"]

    deleted = await api_client.delete(f"/api/v1/venue-types/{venue_type['id']}")
    assert deleted.status_code == 204
    missing = await api_client.get(f"/api/v1/venue-types/{venue_type['id']}")
    assert missing.status_code == 404
    assert missing.json()["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_blank_name_is_rejected(api_client):
    response = await api_client.post("/api/v1/venue-types", json={"name": "   "})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_venue_carries_its_type(api_client):
    venue_type = (await api_client.post("/api/v1/venue-types", json={"name": "Bar"})).json()

    venue = await api_client.post(
        "/api/v1/venues", json={"name": "Night Owl", "venue_type_id": venue_type["id"]}
    )
    unknown = await api_client.post(
        "/api/v1/venues", json={"name": "Nowhere", "venue_type_id": "01NOPE"}
    )

    assert venue.status_code == 201
    assert venue.json()["venue_type_id"] == venue_type["id"]
    assert unknown.status_code == 404
