from datetime import datetime, timezone

import pytest
import requests

from plantprop import create_app
from plantprop.extensions import Services
from plantprop.models import PropagationRequest, plant_from_record
from plantprop.services.plant_store import SeedPlantStore
from plantprop.services.request_store import RequestStore
from plantprop.services.zone_detection import ZoneResolver


class DummyResponse:
    def __init__(self, status_code=200, payload=None, bad_json=False):
        self.status_code = status_code
        self._payload = payload if payload is not None else {}
        self._bad_json = bad_json

    def json(self):
        if self._bad_json:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class DummySession:
    """Stands in for requests.Session; replays queued responses or exceptions."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def queue(self, *items):
        self.responses.extend(items)

    def get(self, url, timeout=None, **kwargs):
        self.calls.append(url)
        if not self.responses:
            raise requests.ConnectionError("no response queued")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def http():
    return DummySession()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def resolver(http, sleeps):
    return ZoneResolver(session=http, timeout=1, retry_delay=0.5, sleep=sleeps.append)


@pytest.fixture
def services(resolver):
    return Services(plants=SeedPlantStore(), requests=RequestStore(), zones=resolver)


@pytest.fixture
def app(services):
    app = create_app("plantprop.config.TestConfig", services=services)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_plant():
    def _make(**overrides):
        record = {
            "common_name": "Test Fern",
            "scientific_name": "Testus fernus",
            "difficulty": "easy",
            "success_rate": 80,
            "methods": ["stem-cutting", "division"],
            "time_to_root": "2-3 weeks",
            "optimal_months": [3, 4, 5],
            "secondary_months": None,
        }
        record.update(overrides)
        return plant_from_record(record)
    return _make


@pytest.fixture
def make_request():
    def _make(zone="9a", maturity="young", environment="inside", plant_id="test-fern"):
        return PropagationRequest(
            id="req-1",
            plant_id=plant_id,
            zone=zone,
            maturity=maturity,
            environment=environment,
            created_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
        )
    return _make


FERN_ROW = {
    "common_name": "Rabbit Foot Fern",
    "scientific_name": "Davallia fejeensis",
    "success_rate": 70,
    "methods": ["division"],
    "optimal_months": [4, 5],
    "secondary_months": [],
}


@pytest.fixture
def fern_services(resolver):
    """Catalogue holding a single plant with no secondary window."""
    return Services(plants=SeedPlantStore(rows=[FERN_ROW]), requests=RequestStore(), zones=resolver)


@pytest.fixture
def fern_client(fern_services):
    return create_app("plantprop.config.TestConfig", services=fern_services).test_client()
