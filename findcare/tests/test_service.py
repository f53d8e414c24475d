"""Tests for FeedService orchestration with a fake query collaborator."""

import pytest

from findcare.config import Config
from findcare.db import ProviderQueryError
from findcare.models import ProviderRecord
from findcare.service import FeedService


class FakeQuery:
    """Records the FilterSpec and returns canned rows (or fails)."""

    def __init__(self, records=None, error=None):
        self.records = records or []
        self.error = error
        self.specs = []

    def fetch(self, spec):
        self.specs.append(spec)
        if self.error:
            raise self.error
        return self.records[: spec.limit]


def test_end_to_end_zip_query():
    query = FakeQuery([
        ProviderRecord(organization_name="", category=None, city="Plano", state="TX",
                       latitude=33.0198, longitude=-96.6989),
        ProviderRecord(organization_name="Zed Clinic", category="Clinic", city="Plano", state="TX",
                       latitude=33.02, longitude=-96.7),
    ])
    body = FeedService(query).build_feed({"location": "73301", "limit": "abc"}).to_dict()

    spec = query.specs[0]
    assert spec.zip5 == "73301" and spec.city is None and spec.state is None
    assert spec.limit == 20

    assert body["stat"] == "ok"
    assert body["next_page"] is None
    assert body["generated_in"].endswith("s")
    first, second = body["items"]
    assert (first["id"], second["id"]) == (1, 2)
    assert first["title"] == "Unnamed Facility"
    assert first["summary"] == "Healthcare Facility in Plano, TX"
    assert second["summary"] == "Clinic in Plano, TX"


def test_limit_passed_through_clamped():
    query = FakeQuery()
    FeedService(query).build_feed({"limit": "500"})
    assert query.specs[0].limit == 200


def test_max_limit_from_config():
    query = FakeQuery()
    FeedService(query, Config(max_limit=50)).build_feed({"limit": "500"})
    assert query.specs[0].limit == 50


def test_query_errors_propagate():
    service = FeedService(FakeQuery(error=ProviderQueryError("Provider query failed: timeout")))
    with pytest.raises(ProviderQueryError):
        service.build_feed({})


def test_default_limit_from_config():
    query = FakeQuery()
    FeedService(query, Config(default_limit=5)).build_feed({})
    assert query.specs[0].limit == 5
