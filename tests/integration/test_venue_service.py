import pytest

from venue_booking.core.exceptions import NotFoundException
from venue_booking.schemas.venue import BookingRulesData, VenueCreate, VenueUpdate
from venue_booking.services.venue_service import VenueService


@pytest.fixture
def service(db_session, cache, keys):
    return VenueService(db_session, cache=cache, keys=keys)


@pytest.mark.asyncio
async def test_create_and_read_back(service):
    created = await service.create_venue(
        VenueCreate(
            name="Lighthouse",
            address="Pier 3",
            capacity=24,
            rules=BookingRulesData(slot_minutes=120, auto_confirm=False),
        )
    )

    fetched = await service.get_venue(created.id)

    assert fetched.name == "Lighthouse"
    assert fetched.slot_minutes == 120
    assert fetched.auto_confirm is False


@pytest.mark.asyncio
async def test_repeated_reads_return_identical_values(service, fake_redis, keys, make_venue):
    venue = await make_venue()

    miss = await service.get_venue(venue.id)
    hit = await service.get_venue(venue.id)

    assert miss.model_dump_json() == hit.model_dump_json()
    assert fake_redis.count("set") == 1
    assert keys.venue_detail(venue.id, 1) in fake_redis.store


@pytest.mark.asyncio
async def test_update_bumps_token_once_and_moves_key(service, cache, fake_redis, keys, make_venue):
    venue = await make_venue(capacity=10)
    await service.get_venue(venue.id)
    version_before = await cache.get_token(keys.venues_token)

    updated = await service.update_venue(venue.id, VenueUpdate(capacity=30))

    venue_bumps = [c for c in fake_redis.commands if c == ("incr", keys.venues_token)]
    assert len(venue_bumps) == 1
    version_after = await cache.get_token(keys.venues_token)
    assert keys.venue_detail(venue.id, version_before) != keys.venue_detail(venue.id, version_after)
    assert updated.capacity == 30
    assert (await service.get_venue(venue.id)).capacity == 30


@pytest.mark.asyncio
async def test_update_rules(service, make_venue):
    venue = await make_venue(slot_minutes=60, auto_confirm=True)

    updated = await service.update_venue(venue.id, VenueUpdate(slot_minutes=90, auto_confirm=False))

    assert updated.slot_minutes == 90
    assert updated.auto_confirm is False


@pytest.mark.asyncio
async def test_update_missing_venue_bumps_nothing(service, fake_redis):
    with pytest.raises(NotFoundException):
        await service.update_venue("01NOPE", VenueUpdate(name="Ghost"))

    assert fake_redis.count("incr") == 0


@pytest.mark.asyncio
async def test_missing_venue_is_negative_cached(service, fake_redis, keys):
    with pytest.raises(NotFoundException, match="Venue not found"):
        await service.get_venue("01NOPE")
    with pytest.raises(NotFoundException):
        await service.get_venue("01NOPE")

    assert fake_redis.store[keys.venue_detail("01NOPE", 1)] == "null"
    assert fake_redis.count("set") == 1


@pytest.mark.asyncio
async def test_list_is_invalidated_by_create(service, make_venue):
    await make_venue(name="Attic")
    assert [v.name for v in await service.list_venues()] == ["Attic"]

    await service.create_venue(VenueCreate(name="Basement", capacity=12))

    assert [v.name for v in await service.list_venues()] == ["Attic", "Basement"]


@pytest.mark.asyncio
async def test_delete(service, make_venue):
    venue = await make_venue()
    venue_id = venue.id
    await service.get_venue(venue_id)

    await service.delete_venue(venue_id)

    with pytest.raises(NotFoundException):
        await service.get_venue(venue_id)
    with pytest.raises(NotFoundException):
        await service.delete_venue(venue_id)
