"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone
from itertools import count

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from shelf.store import ResourceStore


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def clock():
    """Clock frozen at a fixed instant."""
    return FakeClock(datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc))


@pytest.fixture
def id_factory():
    """Deterministic ids: book-1, book-2, ..."""
    counter = count(1)
    return lambda: f"book-{next(counter)}"


@pytest.fixture
def store(clock, id_factory):
    """Empty store with a frozen clock and predictable ids."""
    return ResourceStore(clock=clock, id_factory=id_factory, recompute_finished_on_update=True)


@pytest.fixture
def client(store):
    """Test client bound to the fixture store."""
    with TestClient(create_app(store)) as test_client:
        yield test_client


@pytest.fixture
def dune_payload():
    """Sample create payload."""
    return {
        "name": "Dune",
        "year": 1965,
        "author": "Herrick",
        "summary": "s",
        "publisher": "p",
        "pageCount": 500,
        "readPage": 500,
        "reading": False,
    }


@pytest.fixture
def shelf_payloads(dune_payload):
    """A few books with mixed reading state."""
    return [
        dune_payload,
        {
            "name": "Laskar Pelangi",
            "year": 2005,
            "author": "Andrea Hirata",
            "summary": "Sekolah Muhammadiyah di Belitung",
            "publisher": "Bentang Pustaka",
            "pageCount": 529,
            "readPage": 120,
            "reading": True,
        },
        {
            "name": "Bumi Manusia",
            "year": 1980,
            "author": "Pramoedya Ananta Toer",
            "summary": "Minke dan Annelies",
            "publisher": "Hasta Mitra",
            "pageCount": 535,
            "readPage": 0,
            "reading": False,
        },
    ]
