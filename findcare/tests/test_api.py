"""HTTP tests for /health and /map_feed (lifespan not run; service injected)."""

import pytest
from fastapi.testclient import TestClient

import api
from findcare.db import ProviderQueryError
from findcare.models import ProviderRecord
from findcare.service import FeedService


class FakeQuery:
    def __init__(self, records=None, error=None):
        self.records = records or []
        self.error = error
        self.specs = []

    def fetch(self, spec):
        self.specs.append(spec)
        if self.error:
            raise self.error
        return self.records


@pytest.fixture
def client(monkeypatch):
    def _client(query):
        monkeypatch.setattr(api, "service", FeedService(query) if query else None)
        return TestClient(api.app)
    return _client


def test_health(client):
    resp = client(None).get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


def test_security_headers(client):
    resp = client(None).get("/health")
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "SAMEORIGIN"


def test_map_feed_ok(client):
    query = FakeQuery([
        ProviderRecord(organization_name="<b>Dallas Care</b>", category="Clinic",
                       city="Dallas", state="TX", full_address="1 Elm St",
                       latitude=32.78, longitude=-96.8),
    ])
    resp = client(query).get("/map_feed", params={"location": "Dallas, tx", "q": "care", "limit": "5"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["stat"] == "ok"
    assert body["next_page"] is None
    item = body["items"][0]
    assert item["id"] == 1
    assert item["latitude"] == "32.78"
    assert "&lt;b&gt;Dallas Care&lt;/b&gt;" in item["content"]

    spec = query.specs[0]
    assert (spec.city, spec.state, spec.text_query, spec.limit) == ("Dallas", "TX", "%care%", 5)


def test_bad_limit_is_not_a_validation_error(client):
    query = FakeQuery()
    resp = client(query).get("/map_feed", params={"limit": "abc"})
    assert resp.status_code == 200
    assert query.specs[0].limit == 20


def test_upstream_failure_returns_error_envelope(client):
    query = FakeQuery(error=ProviderQueryError("Provider query failed: connection refused"))
    resp = client(query).get("/map_feed")
    assert resp.status_code == 500
    assert resp.json() == {"stat": "error", "message": "Provider query failed: connection refused"}


def test_service_unavailable_returns_error_envelope(client):
    resp = client(None).get("/map_feed")
    assert resp.status_code == 500
    assert resp.json()["stat"] == "error"
    assert "items" not in resp.json()
