"""Ordered validation rules for a candidate boundary point.

Rules run in fixed priority order and the first failing rule wins:

1. Capacity: the polygon already holds ``max_points`` vertices.
2. Spacing: the candidate is closer than ``min_distance_m`` to any vertex.
3. Self-intersection: with three or more vertices, the new edge from the
   last vertex to the candidate crosses an earlier edge.

Rule 3 is incremental: the closing edge back to the first vertex is not
checked, and the edge ending at the last vertex is skipped because it
shares the new edge's start point.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from paddy_boundary.core.constants import MAX_POINTS, MIN_DISTANCE_M, MIN_POINTS
from paddy_boundary.core.exceptions import PointRejectedError, RejectionReason
from paddy_boundary.geometry.kernel import distance_meters, segments_intersect

if TYPE_CHECKING:
    from collections.abc import Sequence

    from paddy_boundary.core.config import BoundaryConfig
    from paddy_boundary.models.vertex import Vertex

logger = logging.getLogger("paddy_boundary.geometry.validator")


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating one candidate point.

    Attributes:
        reason: The failing rule, or ``None`` when accepted.
        message: Operator-facing explanation (empty when accepted).
    """

    reason: RejectionReason | None = None
    message: str = ""

    @property
    def accepted(self) -> bool:
        return self.reason is None

    def raise_if_rejected(self) -> None:
        """Raise ``PointRejectedError`` for a rejected result."""
        if self.reason is not None:
            raise PointRejectedError(self.reason, self.message)


ACCEPTED = ValidationResult()


@dataclass(frozen=True, slots=True)
class BoundaryValidator:
    """Applies the capacity, spacing, and self-intersection rules.

    Attributes:
        max_points: Capacity limit.
        min_distance_m: Minimum spacing between vertices in metres.
    """

    max_points: int = MAX_POINTS
    min_distance_m: float = MIN_DISTANCE_M

    @classmethod
    def from_config(cls, config: BoundaryConfig) -> BoundaryValidator:
        return cls(max_points=config.max_points, min_distance_m=config.min_distance_m)

    def validate(self, candidate: Vertex, vertices: Sequence[Vertex]) -> ValidationResult:
        """Check *candidate* against the current vertex sequence."""
        if len(vertices) >= self.max_points:
            return ValidationResult(
                RejectionReason.MAX_POINTS,
                f"Maximum points reached ({self.max_points} allowed)",
            )

        for index, vertex in enumerate(vertices):
            if distance_meters(candidate, vertex) < self.min_distance_m:
                logger.debug("Spacing rule failed | nearest_index=%d", index)
                return ValidationResult(
                    RejectionReason.TOO_CLOSE,
                    f"Point too close to existing point (min {self.min_distance_m:g}m apart)",
                )

        if would_self_intersect(candidate, vertices):
            return ValidationResult(
                RejectionReason.SELF_INTERSECTION,
                "This point would create a self-intersecting boundary",
            )

        return ACCEPTED


def would_self_intersect(candidate: Vertex, vertices: Sequence[Vertex]) -> bool:
    """Return True if the edge ``last -> candidate`` crosses an earlier edge.

    Only edges ``(vertices[i], vertices[i + 1])`` for ``i < len - 2`` are
    tested. Fewer than three vertices can never produce a crossing.
    """
    if len(vertices) < MIN_POINTS:
        return False

    last = vertices[-1]
    for i in range(len(vertices) - 2):
        if segments_intersect(last, candidate, vertices[i], vertices[i + 1]):
            logger.debug("Self-intersection | crosses_edge=%d-%d", i, i + 1)
            return True
    return False
