import requests

from plantprop.services.zone_detection import LocationData, ZoneResolver
from conftest import DummyResponse

IPAPI_US = {
    "postal": "90210",
    "city": "Beverly Hills",
    "region": "California",
    "country_name": "United States",
    "latitude": 34.09,
    "longitude": -118.41,
}


def test_resolve_zone_happy_path(resolver, http, sleeps):
    http.queue(DummyResponse(200, IPAPI_US), DummyResponse(200, {"zone": "10a"}))

    assert resolver.resolve_zone() == "10a"
    assert http.calls == ["https://ipapi.co/json/", "https://phzmapi.org/90210.json"]
    assert sleeps == []


def test_zone_is_normalized(resolver, http):
    http.queue(DummyResponse(200, IPAPI_US), DummyResponse(200, {"zone": " 6A "}))
    assert resolver.resolve_zone() == "6a"


def test_geolocation_fails_twice_returns_none(resolver, http, sleeps):
    http.queue(requests.Timeout("timed out"), requests.Timeout("timed out"))

    assert resolver.resolve_zone() is None
    assert len(http.calls) == 2
    assert sleeps == [0.5]


def test_geolocation_retry_succeeds(resolver, http, sleeps):
    http.queue(DummyResponse(503), DummyResponse(200, IPAPI_US), DummyResponse(200, {"zone": "10a"}))

    assert resolver.resolve_zone() == "10a"
    assert len(http.calls) == 3
    assert sleeps == [0.5]


def test_zone_lookup_retries_once_then_none(resolver, http, sleeps):
    http.queue(DummyResponse(200, IPAPI_US), DummyResponse(500), DummyResponse(502))

    assert resolver.resolve_zone() is None
    assert len(http.calls) == 3
    assert sleeps == [0.5]


def test_non_us_postal_code_skips_zone_lookup(resolver, http):
    http.queue(DummyResponse(200, {"postal": "SW1A 1AA", "country_name": "United Kingdom"}))

    assert resolver.resolve_zone() is None
    assert len(http.calls) == 1


def test_missing_postal_code_skips_zone_lookup(resolver, http):
    http.queue(DummyResponse(200, {"city": "Somewhere"}))

    assert resolver.resolve_zone() is None
    assert len(http.calls) == 1


def test_payload_without_zone_returns_none(resolver, http):
    http.queue(DummyResponse(200, IPAPI_US), DummyResponse(200, {"temperature_range": "30 to 35"}))
    assert resolver.resolve_zone() is None


def test_provider_error_payload_counts_as_failure(resolver, http, sleeps):
    limited = {"error": True, "reason": "RateLimited"}
    http.queue(DummyResponse(200, limited), DummyResponse(200, limited))

    assert resolver.detect_location() is None
    assert sleeps == [0.5]


def test_invalid_json_counts_as_failure(resolver, http):
    http.queue(DummyResponse(200, bad_json=True), DummyResponse(200, IPAPI_US))

    location = resolver.detect_location()
    assert location == LocationData(
        postal_code="90210",
        city="Beverly Hills",
        region="California",
        country="United States",
        latitude=34.09,
        longitude=-118.41,
    )


def test_public_ip_is_used_in_url(resolver, http):
    http.queue(DummyResponse(200, IPAPI_US))
    resolver.detect_location("8.8.8.8")
    assert http.calls == ["https://ipapi.co/8.8.8.8/json/"]


def test_private_or_invalid_ip_uses_generic_url(resolver, http):
    http.queue(DummyResponse(200, IPAPI_US), DummyResponse(200, IPAPI_US))
    resolver.detect_location("192.168.1.20")
    resolver.detect_location("not-an-ip")
    assert http.calls == ["https://ipapi.co/json/", "https://ipapi.co/json/"]


def test_resolve_zone_never_raises(http, sleeps):
    class ExplodingSession:
        def get(self, url, timeout=None):
            raise RuntimeError("boom")

    resolver = ZoneResolver(session=ExplodingSession(), sleep=sleeps.append)
    assert resolver.resolve_zone() is None


def test_from_config_reads_settings():
    resolver = ZoneResolver.from_config({
        "ZONE_LOOKUP_URL": "https://zones.example/{postal_code}",
        "ZONE_LOOKUP_TIMEOUT": "2",
        "ZONE_RETRY_DELAY": 0,
    })
    assert resolver.zone_lookup_url == "https://zones.example/{postal_code}"
    assert resolver.timeout == 2.0
    assert resolver.retry_delay == 0.0
    assert resolver.geolocation_url == "https://ipapi.co/json/"
