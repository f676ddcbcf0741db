"""Geometry for boundary editing.

- kernel: great-circle distance, segment intersection, spherical area
- snap: merge a candidate point into a nearby existing vertex
- validator: ordered capacity / spacing / self-intersection rules
"""

from paddy_boundary.geometry.kernel import (
    distance_meters,
    segments_intersect,
    spherical_area_m2,
)
from paddy_boundary.geometry.snap import snap_point
from paddy_boundary.geometry.validator import BoundaryValidator, ValidationResult

__all__ = [
    "BoundaryValidator",
    "ValidationResult",
    "distance_meters",
    "segments_intersect",
    "snap_point",
    "spherical_area_m2",
]
