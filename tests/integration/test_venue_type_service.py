import pytest

from venue_booking.core.exceptions import NotFoundException
from venue_booking.models import VenueType
from venue_booking.schemas.venue import VenueCreate, VenueUpdate
from venue_booking.schemas.venue_type import VenueTypeCreate, VenueTypeUpdate
from venue_booking.services.venue_service import VenueService
from venue_booking.services.venue_type_service import VenueTypeService


@pytest.fixture
def service(db_session, cache, keys):
    return VenueTypeService(db_session, cache=cache, keys=keys)


@pytest.fixture
def venues(db_session, cache, keys):
    return VenueService(db_session, cache=cache, keys=keys)


@pytest.mark.asyncio
async def test_listing_follows_display_order_then_name(service):
    await service.create_venue_type(VenueTypeCreate(name="Rooftop", display_order=2))
    await service.create_venue_type(VenueTypeCreate(name="Restaurant", display_order=1))
    await service.create_venue_type(VenueTypeCreate(name="Bar", display_order=1))

    names = [vt.name for vt in await service.list_venue_types()]

    assert names == ["Bar", "Restaurant", "Rooftop"]


@pytest.mark.asyncio
async def test_update_replaces_every_field(service):
    created = await service.create_venue_type(
        VenueTypeCreate(name="Cafe", description="Daytime only", display_order=3)
    )

    updated = await service.update_venue_type(
        created.id, VenueTypeUpdate(name="Coffee house", display_order=1)
    )

    assert updated.name == "Coffee house"
    assert updated.description is None
    assert (await service.get_venue_type(created.id)).display_order == 1


@pytest.mark.asyncio
async def test_missing_venue_type(service):
    with pytest.raises(NotFoundException, match="VenueType not found"):
        await service.get_venue_type("01NOPE")
    with pytest.raises(NotFoundException):
        await service.update_venue_type("01NOPE", VenueTypeUpdate(name="Ghost"))
    with pytest.raises(NotFoundException):
        await service.delete_venue_type("01NOPE")


@pytest.mark.asyncio
async def test_venues_reference_existing_types_only(venues, service):
    bar = await service.create_venue_type(VenueTypeCreate(name="Bar"))

    venue = await venues.create_venue(VenueCreate(name="Night Owl", venue_type_id=bar.id))
    assert venue.venue_type_id == bar.id

    with pytest.raises(NotFoundException, match="VenueType not found"):
        await venues.create_venue(VenueCreate(name="Nowhere", venue_type_id="01NOPE"))
    with pytest.raises(NotFoundException):
        await venues.update_venue(venue.id, VenueUpdate(venue_type_id="01NOPE"))


@pytest.mark.asyncio
async def test_delete_detaches_venues_and_moves_venue_readers(
    db_session, service, venues, cache, keys
):
    hall = await service.create_venue_type(VenueTypeCreate(name="Hall"))
    venue = await venues.create_venue(VenueCreate(name="Guild Hall", venue_type_id=hall.id))
    assert (await venues.get_venue(venue.id)).venue_type_id == hall.id
    version_before = await cache.get_token(keys.venues_token)

    await service.delete_venue_type(hall.id)

    assert await db_session.get(VenueType, hall.id) is None
    assert await cache.get_token(keys.venues_token) == version_before + 1
    assert (await venues.get_venue(venue.id)).venue_type_id is None


@pytest.mark.asyncio
async def test_deleting_an_unused_type_bumps_nothing(service, fake_redis):
    spare = await service.create_venue_type(VenueTypeCreate(name="Spare"))

    await service.delete_venue_type(spare.id)

    assert fake_redis.count("incr") == 0
