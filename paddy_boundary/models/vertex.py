"""Data model for a single boundary vertex.

A ``Vertex`` is one WGS 84 point placed by the operator, either by
clicking the map or by typing coordinates. Vertices are immutable; the
editing state machine owns the ordered sequence of them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from paddy_boundary.core.constants import (
    DISPLAY_PRECISION,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)
from paddy_boundary.core.exceptions import ContractError, InvalidCoordinateError


@dataclass(frozen=True, slots=True)
class Vertex:
    """A boundary point in decimal degrees.

    Attributes:
        lat: Latitude in degrees, ``[-90, 90]``.
        lng: Longitude in degrees, ``[-180, 180]``.
    """

    lat: float
    lng: float

    def to_dict(self) -> dict[str, float]:
        """Serialise to the ``{"lat", "lng"}`` wire shape."""
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def from_dict(cls, data: object) -> Vertex:
        """Deserialise a ``{"lat", "lng"}`` mapping.

        Raises:
            ContractError: If the mapping is missing a key or a value is
                not numeric.
            InvalidCoordinateError: If the coordinate is out of range.
        """
        if not isinstance(data, dict):
            msg = f"vertex must be an object, got {type(data).__name__}"
            raise ContractError(msg, code="VERTEX_MALFORMED")
        try:
            lat = data["lat"]
            lng = data["lng"]
        except KeyError as exc:
            msg = f"vertex is missing key {exc.args[0]!r}"
            raise ContractError(msg, code="VERTEX_MALFORMED") from exc
        if isinstance(lat, bool) or isinstance(lng, bool):
            msg = "vertex coordinates must be numbers"
            raise ContractError(msg, code="VERTEX_MALFORMED")
        if not isinstance(lat, int | float) or not isinstance(lng, int | float):
            msg = "vertex coordinates must be numbers"
            raise ContractError(msg, code="VERTEX_MALFORMED")
        return make_vertex(float(lat), float(lng))

    def display(self, precision: int = DISPLAY_PRECISION) -> str:
        """Format as ``"lat, lng"`` for the operator."""
        return f"{self.lat:.{precision}f}, {self.lng:.{precision}f}"

    def rounded(self, precision: int) -> Vertex:
        """Return a copy with both coordinates rounded to *precision* places."""
        return Vertex(round(self.lat, precision), round(self.lng, precision))


def validate_wgs84_coordinate(lat: float, lng: float) -> None:
    """Check that a coordinate is finite and inside WGS 84 bounds.

    Raises:
        InvalidCoordinateError: If either value is NaN, infinite, or out
            of range.
    """
    if math.isnan(lat) or math.isnan(lng):
        msg = "Please enter valid latitude and longitude values"
        raise InvalidCoordinateError(msg)
    if not MIN_LATITUDE <= lat <= MAX_LATITUDE:
        msg = f"Latitude must be between {MIN_LATITUDE:g} and {MAX_LATITUDE:g}"
        raise InvalidCoordinateError(msg)
    if not MIN_LONGITUDE <= lng <= MAX_LONGITUDE:
        msg = f"Longitude must be between {MIN_LONGITUDE:g} and {MAX_LONGITUDE:g}"
        raise InvalidCoordinateError(msg)


def make_vertex(lat: float, lng: float) -> Vertex:
    """Build a ``Vertex`` after range validation.

    Raises:
        InvalidCoordinateError: If the coordinate is out of range.
    """
    validate_wgs84_coordinate(lat, lng)
    return Vertex(lat, lng)


def parse_coordinate_input(lat_text: str, lng_text: str) -> Vertex:
    """Parse operator-typed coordinate text into a ``Vertex``.

    Surrounding whitespace is ignored. Anything ``float()`` cannot read,
    and the literal ``nan``, is rejected.

    Raises:
        InvalidCoordinateError: If the text is not numeric or the
            coordinate is out of range.
    """
    try:
        lat = float(lat_text.strip())
        lng = float(lng_text.strip())
    except (AttributeError, ValueError) as exc:
        msg = "Please enter valid latitude and longitude values"
        raise InvalidCoordinateError(msg) from exc
    return make_vertex(lat, lng)


def point_label(index: int) -> str:
    """Return the operator-facing label for a vertex index (0 -> ``"A"``)."""
    if index < 0:
        msg = f"Point index must be >= 0, got {index}"
        raise ValueError(msg)
    return chr(ord("A") + index)
