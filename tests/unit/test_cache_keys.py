from datetime import date

from venue_booking.core.config import Settings
from venue_booking.core.enums import BookingStatus
from venue_booking.schemas.booking import BookingFilters
from venue_booking.services.cache_keys import CacheKeys, CachePolicies, CachePolicy


class TestCacheKeys:
    def test_token_names(self, keys):
        assert keys.venues_token == "hb:venues:ver"
        assert keys.bookings_token == "hb:bookings:ver"
        assert keys.availability_token == "hb:availability:ver"

    def test_versioned_keys(self, keys):
        assert keys.venue_detail("01VEN", 3) == "hb:venues:v3:01VEN"
        assert keys.venue_list(3) == "hb:venues:list:v3"
        assert keys.booking_detail("01BKG", 7) == "hb:bookings:v7:01BKG"
        assert (
            keys.availability("01VEN", date(2026, 5, 1), 4, 2)
            == "hb:availability:v2:01VEN:2026-05-01:p4"
        )

    def test_version_change_changes_key(self, keys):
        assert keys.venue_detail("01VEN", 1) != keys.venue_detail("01VEN", 2)

    def test_namespace_is_configurable(self):
        keys = CacheKeys("staging")

        assert keys.venues_token == "staging:venues:ver"
        assert keys.booking_list(None, 1) == "staging:bookings:list:v1:all"


class TestFilterSignature:
    def test_no_filters_is_all(self):
        assert CacheKeys.filter_signature(None) == "all"
        assert CacheKeys.filter_signature(BookingFilters()) == "all"

    def test_fields_are_sorted_by_name(self):
        filters = BookingFilters(
            venue_id="V1", status=BookingStatus.CONFIRMED, customer_id="C1"
        )

        assert CacheKeys.filter_signature(filters) == "customer=C1|status=CONFIRMED|venue=V1"

    def test_equal_filters_share_a_key(self, keys):
        a = BookingFilters(venue_id="V1", status="PENDING")
        b = BookingFilters(status=BookingStatus.PENDING, venue_id="V1")

        assert keys.booking_list(a, 5) == keys.booking_list(b, 5)
        assert keys.booking_list(a, 5) == "hb:bookings:list:v5:status=PENDING|venue=V1"

    def test_blank_ids_are_ignored(self):
        assert CacheKeys.filter_signature(BookingFilters(venue_id="  ")) == "all"

    def test_separators_inside_values_cannot_forge_another_filter(self, keys):
        real = BookingFilters(customer_id="C1", status=BookingStatus.CONFIRMED)
        crafted = BookingFilters(customer_id="C1|status=CONFIRMED")

        assert keys.booking_list(real, 1) != keys.booking_list(crafted, 1)
        assert (
            CacheKeys.filter_signature(crafted) == "customer=C1%7Cstatus%3DCONFIRMED"
        )


def test_policies_follow_settings():
    config = Settings(
        venue_detail_ttl=100,
        venue_list_ttl=50,
        venue_jitter=5,
        booking_detail_ttl=90,
        booking_list_ttl=45,
        booking_jitter=4,
        availability_ttl=30,
        availability_jitter=3,
    )

    policies = CachePolicies.from_settings(config)

    assert policies.venue_detail == CachePolicy(100, 5)
    assert policies.venue_list == CachePolicy(50, 5)
    assert policies.booking_detail == CachePolicy(90, 4)
    assert policies.booking_list == CachePolicy(45, 4)
    assert policies.availability == CachePolicy(30, 3)
