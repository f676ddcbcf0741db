"""Snap a candidate point onto a nearby existing vertex.

The first existing vertex (in insertion order) strictly inside the snap
radius wins, even if a later vertex is nearer. A candidate at distance
zero is returned as-is, not snapped.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from paddy_boundary.core.constants import SNAP_TOLERANCE_M
from paddy_boundary.geometry.kernel import distance_meters

if TYPE_CHECKING:
    from collections.abc import Iterable

    from paddy_boundary.models.vertex import Vertex

logger = logging.getLogger("paddy_boundary.geometry.snap")


def snap_point(
    candidate: Vertex,
    existing: Iterable[Vertex],
    *,
    tolerance_m: float = SNAP_TOLERANCE_M,
) -> Vertex:
    """Return the first existing vertex within *tolerance_m*, else *candidate*.

    Args:
        candidate: The point about to be inserted.
        existing: Current vertices in insertion order.
        tolerance_m: Snap radius in metres (exclusive).

    Returns:
        The exact existing ``Vertex`` object that was snapped to, or the
        unchanged candidate.
    """
    for index, vertex in enumerate(existing):
        distance = distance_meters(candidate, vertex)
        if 0 < distance < tolerance_m:
            logger.debug(
                "Point snapped | index=%d | distance=%.3f m | tolerance=%.3f m",
                index,
                distance,
                tolerance_m,
            )
            return vertex
    return candidate
