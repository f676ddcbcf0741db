"""Tests for BoundaryValidator.

Covers the three rules (capacity, spacing, self-intersection), their
priority order, and the incremental edge set used for crossings.
"""

from __future__ import annotations

import pytest

from paddy_boundary.core.config import BoundaryConfig
from paddy_boundary.core.exceptions import PointRejectedError, RejectionReason
from paddy_boundary.geometry.validator import (
    ACCEPTED,
    BoundaryValidator,
    ValidationResult,
    would_self_intersect,
)
from paddy_boundary.models.vertex import Vertex


@pytest.fixture()
def validator() -> BoundaryValidator:
    return BoundaryValidator()


# ---------------------------------------------------------------------------
# ValidationResult
# ---------------------------------------------------------------------------


class TestValidationResult:
    def test_accepted_singleton(self) -> None:
        assert ACCEPTED.accepted is True
        ACCEPTED.raise_if_rejected()

    def test_rejected_raises(self) -> None:
        result = ValidationResult(RejectionReason.TOO_CLOSE, "too close")
        assert result.accepted is False
        with pytest.raises(PointRejectedError) as exc_info:
            result.raise_if_rejected()
        assert exc_info.value.reason is RejectionReason.TOO_CLOSE
        assert exc_info.value.code == "POINT_TOO_CLOSE"


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


class TestCapacityRule:
    def test_eleventh_point_rejected(self, validator, ten_points, metres) -> None:
        result = validator.validate(metres(500, 500), ten_points)
        assert result.reason is RejectionReason.MAX_POINTS
        assert result.message == "Maximum points reached (10 allowed)"

    def test_ninth_to_tenth_accepted(self, validator, ten_points) -> None:
        assert validator.validate(ten_points[9], ten_points[:9]).accepted

    def test_custom_limit(self, triangle, metres) -> None:
        result = BoundaryValidator(max_points=3).validate(metres(-30, 20), triangle)
        assert result.reason is RejectionReason.MAX_POINTS

    def test_capacity_checked_before_spacing(self, triangle) -> None:
        """A duplicate of an existing vertex still reports capacity first."""
        result = BoundaryValidator(max_points=3).validate(triangle[0], triangle)
        assert result.reason is RejectionReason.MAX_POINTS


class TestSpacingRule:
    def test_point_twenty_centimetres_away(self, validator, metres) -> None:
        result = validator.validate(metres(0.2, 0), [metres(0, 0)])
        assert result.reason is RejectionReason.TOO_CLOSE
        assert result.message == "Point too close to existing point (min 0.5m apart)"

    def test_duplicate_point(self, validator, metres) -> None:
        assert validator.validate(metres(0, 0), [metres(0, 0)]).reason is RejectionReason.TOO_CLOSE

    def test_any_vertex_counts(self, validator, triangle, metres) -> None:
        near_first = metres(0.1, 0.1)
        assert validator.validate(near_first, triangle).reason is RejectionReason.TOO_CLOSE

    def test_just_beyond_min_distance_accepted(self, metres) -> None:
        validator = BoundaryValidator(min_distance_m=0.5)
        assert validator.validate(metres(0.6, 0), [metres(0, 0)]).accepted

    def test_spacing_checked_before_intersection(self, validator, metres) -> None:
        a, b, c = metres(0, 0), metres(0, 100), metres(100, 100)
        candidate = metres(-0.2, 0.1)
        assert would_self_intersect(candidate, [a, b, c]) is True
        result = validator.validate(candidate, [a, b, c])
        assert result.reason is RejectionReason.TOO_CLOSE

    def test_config_threshold(self, metres) -> None:
        validator = BoundaryValidator.from_config(BoundaryConfig(min_distance_m=2.0))
        result = validator.validate(metres(1.5, 0), [metres(0, 0)])
        assert result.reason is RejectionReason.TOO_CLOSE


class TestSelfIntersectionRule:
    def test_bowtie_rejected(self, validator, metres) -> None:
        a, b, c = metres(0, 0), metres(0, 100), metres(100, 100)
        candidate = metres(-100, 0)
        result = validator.validate(candidate, [a, b, c])
        assert result.reason is RejectionReason.SELF_INTERSECTION
        assert result.message == "This point would create a self-intersecting boundary"

    def test_convex_fourth_point_accepted(self, validator, square_100m) -> None:
        assert validator.validate(square_100m[3], square_100m[:3]).accepted

    def test_two_points_never_intersect(self, validator, metres) -> None:
        assert validator.validate(metres(50, -50), [metres(0, 0), metres(0, 100)]).accepted

    def test_adjacent_edge_skipped(self, metres) -> None:
        """Folding straight back along the previous edge is not a crossing."""
        a, b, c = metres(0, 0), metres(0, 100), metres(100, 100)
        assert would_self_intersect(metres(50, 100), [a, b, c]) is False

    def test_crossing_later_edge(self, metres) -> None:
        vertices = [metres(0, 0), metres(0, 100), metres(100, 100), metres(100, 0)]
        # Edge d -> candidate crosses b-c.
        assert would_self_intersect(metres(50, 150), vertices) is True

    def test_closing_edge_not_checked(self, metres) -> None:
        """Only the new edge from the last vertex is tested, never candidate -> first."""
        a, b, c = metres(0, 0), metres(0, 100), metres(100, 100)
        # candidate -> a would cross b-c, but that closing edge is not considered.
        assert would_self_intersect(metres(50, 150), [a, b, c]) is False

    def test_empty_sequence(self) -> None:
        assert would_self_intersect(Vertex(0.0, 0.0), []) is False
