"""Geometry kernel: pure functions over WGS 84 vertices.

Distances use the haversine formula and areas use the spherical-excess
approximation, both on a sphere of radius ``EARTH_RADIUS_M``. The area
formula is accurate for parcels up to a few kilometres across; it is not
an ellipsoidal computation.

Segment intersection works directly in degree space. Only the sign and
the parametric position of the crossing matter, so no projection is
needed at paddy scale.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from paddy_boundary.core.constants import EARTH_RADIUS_M, MIN_POINTS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from paddy_boundary.models.vertex import Vertex


class GeometryError(ValueError):
    """Raised when a geometry function receives too few vertices."""


# ---------------------------------------------------------------------------
# Distance
# ---------------------------------------------------------------------------


def distance_meters(a: Vertex, b: Vertex) -> float:
    """Great-circle distance between two vertices in metres (haversine)."""
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lng - a.lng)

    h = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1 - h))


# ---------------------------------------------------------------------------
# Segment intersection
# ---------------------------------------------------------------------------


def segments_intersect(p1: Vertex, p2: Vertex, p3: Vertex, p4: Vertex) -> bool:
    """Return True if segment ``p1-p2`` properly crosses segment ``p3-p4``.

    Both parametric positions must lie strictly inside ``(0, 1)``, so
    segments that only touch at an endpoint do not count. Parallel and
    collinear segments (zero determinant) never count.
    """
    det = (p2.lng - p1.lng) * (p4.lat - p3.lat) - (p4.lng - p3.lng) * (p2.lat - p1.lat)
    if det == 0:
        return False

    lam = ((p4.lat - p3.lat) * (p4.lng - p1.lng) + (p3.lng - p4.lng) * (p4.lat - p1.lat)) / det
    gamma = ((p1.lat - p2.lat) * (p4.lng - p1.lng) + (p2.lng - p1.lng) * (p4.lat - p1.lat)) / det

    return 0 < lam < 1 and 0 < gamma < 1


# ---------------------------------------------------------------------------
# Area
# ---------------------------------------------------------------------------


def spherical_area_m2(vertices: Sequence[Vertex]) -> float:
    """Area enclosed by a vertex ring in square metres.

    The ring is closed implicitly (last vertex joins the first). Winding
    order does not matter; the result is never negative.

    Raises:
        GeometryError: If fewer than three vertices are given.
    """
    _require_ring(vertices, "area computation")

    total = 0.0
    count = len(vertices)
    for i in range(count):
        a = vertices[i]
        b = vertices[(i + 1) % count]
        total += math.radians(b.lng - a.lng) * (
            2 + math.sin(math.radians(a.lat)) + math.sin(math.radians(b.lat))
        )

    return abs(total) * EARTH_RADIUS_M * EARTH_RADIUS_M / 2


def perimeter_meters(vertices: Sequence[Vertex]) -> float:
    """Length of the closed ring in metres."""
    _require_ring(vertices, "perimeter computation")
    count = len(vertices)
    return sum(distance_meters(vertices[i], vertices[(i + 1) % count]) for i in range(count))


# ---------------------------------------------------------------------------
# Centroid and bounding box (map re-centring)
# ---------------------------------------------------------------------------


def compute_centroid(vertices: Sequence[Vertex]) -> tuple[float, float]:
    """Planar centroid of the ring as ``(lat, lng)`` using Shapely.

    Collinear rings have no area; their vertex mean is returned instead.

    Raises:
        GeometryError: If fewer than three vertices are given.
    """
    _require_ring(vertices, "centroid computation")

    from shapely.geometry import Polygon

    poly = Polygon([(v.lng, v.lat) for v in vertices])
    if poly.is_empty or poly.area == 0:
        count = len(vertices)
        return (
            sum(v.lat for v in vertices) / count,
            sum(v.lng for v in vertices) / count,
        )

    centroid = poly.centroid
    return (centroid.y, centroid.x)


def compute_bbox(vertices: Sequence[Vertex]) -> tuple[float, float, float, float]:
    """Tight bounding box ``(min_lng, min_lat, max_lng, max_lat)``.

    Raises:
        GeometryError: If no vertices are given.
    """
    if not vertices:
        msg = "Empty vertex list: no coordinates provided for bbox computation"
        raise GeometryError(msg)
    lngs = [v.lng for v in vertices]
    lats = [v.lat for v in vertices]
    return (min(lngs), min(lats), max(lngs), max(lats))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _require_ring(vertices: Sequence[Vertex], context: str) -> None:
    if len(vertices) < MIN_POINTS:
        msg = (
            f"Insufficient vertices for {context}: "
            f"need at least {MIN_POINTS}, got {len(vertices)}"
        )
        raise GeometryError(msg)
