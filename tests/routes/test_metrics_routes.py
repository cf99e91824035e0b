from fastapi.testclient import TestClient

from venue_booking.main import app
from venue_booking.monitoring.prometheus_metrics import prometheus_metrics


def test_metrics_endpoint_exposes_registry():
    prometheus_metrics.record_service_operation("VenueService", "get_venue", 0.01)
    client = TestClient(app)

    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "venue_booking_service_operation_duration_seconds_bucket" in response.text
    assert 'service="VenueService"' in response.text
    assert 'venue_booking_cache_events_total{event="hits"}' in response.text
