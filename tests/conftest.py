"""
Travel Sample API — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Tests must not need a running Couchbase cluster.
How:   FakeStore implements the CouchbaseStore contract in memory; the API
       client is built with create_app(store=...) so every handler talks to it.

Fixture Hierarchy:
    ├── fake_store:      in-memory store, fresh per test
    ├── raising_store:   store whose every method fails the test if called
    ├── test_client:     httpx AsyncClient bound to an app using fake_store
    ├── sample_airline / sample_airport / sample_route: valid payloads
"""

import os
from collections import defaultdict
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports
os.environ["PROVISION_SEARCH_INDEX"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from app.database import StoreOutcome, StoreResult  # noqa: E402


class FakeStore:
    """
    In-memory stand-in for CouchbaseStore.

    Documents live in self.documents[collection][key]. Query and search calls
    are recorded and answered from query_rows / search_rows. Setting `fail`
    makes every operation report StoreOutcome.FAILURE.
    """

    def __init__(self):
        self.documents: Dict[str, Dict[str, Any]] = defaultdict(dict)
        self.query_rows: List[Dict[str, Any]] = []
        self.search_rows: List[Dict[str, Any]] = []
        self.queries: List[tuple] = []
        self.searches: List[dict] = []
        self.index_names: List[str] = []
        self.upserted_indexes: List[dict] = []
        self.fail = False
        self.closed = False

    def _failure(self) -> Optional[StoreResult]:
        if self.fail:
            return StoreResult(StoreOutcome.FAILURE, error="TimeoutException: simulated")
        return None

    async def get(self, collection, key):
        if self.fail:
            return self._failure()
        if key not in self.documents[collection]:
            return StoreResult(StoreOutcome.NOT_FOUND)
        return StoreResult.success(dict(self.documents[collection][key]))

    async def insert(self, collection, key, value):
        if self.fail:
            return self._failure()
        if key in self.documents[collection]:
            return StoreResult(StoreOutcome.ALREADY_EXISTS)
        self.documents[collection][key] = dict(value)
        return StoreResult.success(value)

    async def upsert(self, collection, key, value):
        if self.fail:
            return self._failure()
        self.documents[collection][key] = dict(value)
        return StoreResult.success(value)

    async def remove(self, collection, key):
        if self.fail:
            return self._failure()
        if key not in self.documents[collection]:
            return StoreResult(StoreOutcome.NOT_FOUND)
        del self.documents[collection][key]
        return StoreResult.success()

    async def query(self, statement, params=None):
        self.queries.append((statement, params or {}))
        if self.fail:
            return self._failure()
        return StoreResult.success(list(self.query_rows))

    async def search(self, index_name, search_query, limit, skip, fields=None):
        self.searches.append(
            {"index": index_name, "query": search_query, "limit": limit, "skip": skip}
        )
        if self.fail:
            return self._failure()
        return StoreResult.success(list(self.search_rows))

    async def ping(self):
        return self._failure() or StoreResult.success()

    async def search_index_names(self):
        return self._failure() or StoreResult.success(list(self.index_names))

    async def upsert_search_index(self, definition):
        if self.fail:
            return self._failure()
        self.upserted_indexes.append(definition)
        self.index_names.append(definition["name"])
        return StoreResult.success(definition["name"])

    async def close(self):
        self.closed = True


class RaisingStore:
    """Any attribute access fails: proves a code path never reaches the store."""

    def __getattr__(self, name):
        raise AssertionError(f"store.{name} must not be called")


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def raising_store():
    return RaisingStore()


@pytest.fixture
def sample_airline():
    return {
        "name": "40-Mile Air",
        "iata": "Q5",
        "icao": "MLA",
        "callsign": "MILE-AIR",
        "country": "United States",
    }


@pytest.fixture
def sample_airport():
    return {
        "airportname": "Calais Dunkerque",
        "city": "Calais",
        "country": "France",
        "faa": "CQF",
        "icao": "LFAC",
        "tz": "Europe/Paris",
        "geo": {"lat": 50.962097, "lon": 1.954764, "alt": 12},
    }


@pytest.fixture
def sample_route():
    return {
        "airline": "AF",
        "airlineid": "airline_137",
        "sourceairport": "TLV",
        "destinationairport": "MRS",
        "stops": 0,
        "equipment": "320",
        "schedule": [
            {"day": 0, "utc": "10:13:00", "flight": "AF198"},
            {"day": 0, "utc": "19:14:00", "flight": "AF547"},
        ],
        "distance": 2881.617376098415,
    }


def build_client(store) -> AsyncClient:
    from app.main import create_app

    app = create_app(store=store)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest_asyncio.fixture
async def test_client(fake_store):
    """
    HTTPX AsyncClient talking to an app backed by fake_store.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    async with build_client(fake_store) as client:
        yield client


@pytest_asyncio.fixture
async def guarded_client(raising_store):
    """Client whose store fails the test on any call."""
    async with build_client(raising_store) as client:
        yield client
