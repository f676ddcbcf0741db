"""Shared pytest fixtures for the paddy boundary test suite."""

from __future__ import annotations

import math
from datetime import UTC, datetime

import pytest

from paddy_boundary.core.constants import EARTH_RADIUS_M
from paddy_boundary.models.boundary import BoundaryRecord
from paddy_boundary.models.vertex import Vertex
from paddy_boundary.providers.base import BoundaryStore, BoundaryStoreError

# ---------------------------------------------------------------------------
# Coordinates
# ---------------------------------------------------------------------------

BASE_LAT = 14.5995
BASE_LNG = 120.9842

# Degrees of latitude per metre on the kernel's sphere.
DEG_PER_METRE = 180 / (math.pi * EARTH_RADIUS_M)

FIXED_SAVED_AT = datetime(2026, 10, 18, 6, 30, tzinfo=UTC)


def offset(north_m: float, east_m: float, *, lat: float = BASE_LAT, lng: float = BASE_LNG) -> Vertex:
    """Vertex displaced *north_m* / *east_m* metres from (lat, lng)."""
    d_lat = north_m * DEG_PER_METRE
    d_lng = east_m * DEG_PER_METRE / math.cos(math.radians(lat))
    return Vertex(lat + d_lat, lng + d_lng)


def ring(count: int, *, radius_m: float = 50.0) -> list[Vertex]:
    """*count* vertices walked anticlockwise around a circle (a convex ring)."""
    return [
        offset(
            radius_m * math.sin(2 * math.pi * i / count),
            radius_m * math.cos(2 * math.pi * i / count),
        )
        for i in range(count)
    ]


@pytest.fixture()
def square_100m() -> list[Vertex]:
    """A true 100 m x 100 m square near Manila, anticlockwise."""
    return [offset(0, 0), offset(0, 100), offset(100, 100), offset(100, 0)]


@pytest.fixture()
def triangle() -> list[Vertex]:
    """Three well-separated vertices (tens of metres apart)."""
    return [offset(0, 0), offset(0, 40), offset(30, 20)]


@pytest.fixture()
def ten_points() -> list[Vertex]:
    """Ten vertices on a 50 m circle; every prefix is a valid boundary."""
    return ring(10)


@pytest.fixture()
def fixed_clock():
    return lambda: FIXED_SAVED_AT


@pytest.fixture()
def saved_record(square_100m: list[Vertex]) -> BoundaryRecord:
    return BoundaryRecord.from_vertices(
        square_100m,
        area_m2=10_000.0,
        boundary_id="device-42",
        saved_at=FIXED_SAVED_AT.isoformat(),
    )


# ---------------------------------------------------------------------------
# Store doubles
# ---------------------------------------------------------------------------


class FlakyStore(BoundaryStore):
    """Fails the first *failures* saves, then stores like a dict."""

    name = "flaky"

    def __init__(self, failures: int = 1) -> None:
        self.failures = failures
        self.calls = 0
        self.records: dict[str, BoundaryRecord] = {}

    async def save(self, record: BoundaryRecord) -> None:
        self.calls += 1
        if self.calls <= self.failures:
            msg = "storage account unreachable"
            raise BoundaryStoreError(self.name, msg)
        self.records[record.boundary_id] = record

    async def load(self, boundary_id: str) -> BoundaryRecord | None:
        return self.records.get(boundary_id)


@pytest.fixture()
def flaky_store() -> FlakyStore:
    return FlakyStore()


# ---------------------------------------------------------------------------
# Helper fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def metres():
    """The ``offset`` helper: ``metres(north, east)`` -> Vertex near the base point."""
    return offset
