"""Pydantic model for a persisted boundary snapshot.

This is the document handed to the persistence port when a boundary is
saved, and read back when a saved boundary seeds the editor. Field
aliases give the camelCase wire shape the field app already stores::

    {
      "$schema": "paddy-boundary-v1",
      "boundaryId": "device-42",
      "vertices": [{"lat": 14.5995, "lng": 120.9842}, ...],
      "areaSquareMeters": 11846.2,
      "pointCount": 4,
      "savedAt": "2026-10-18T06:30:00+00:00",
      "centroid": {"lat": ..., "lng": ...},
      "boundingBox": [min_lng, min_lat, max_lng, max_lat]
    }

Coordinates are rounded to ``COORDINATE_PRECISION`` decimal places when
the snapshot is built; the area is computed from the unrounded vertices.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from paddy_boundary.core.constants import (
    AREA_DISPLAY_PRECISION,
    COORDINATE_PRECISION,
    SQ_METRES_PER_HECTARE,
)
from paddy_boundary.core.exceptions import ContractError
from paddy_boundary.geometry.kernel import compute_bbox, compute_centroid
from paddy_boundary.models.vertex import Vertex

if TYPE_CHECKING:
    from collections.abc import Sequence

# Schema version for forward compatibility
SCHEMA_VERSION = "paddy-boundary-v1"


class VertexPayload(BaseModel):
    """One persisted vertex, range-checked on load."""

    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)

    def to_vertex(self) -> Vertex:
        return Vertex(self.lat, self.lng)


class BoundaryRecord(BaseModel):
    """Locked, immutable snapshot of a saved boundary.

    Attributes:
        schema_version: Schema identifier for forward compatibility.
        boundary_id: Owner of the boundary (device or paddy identifier).
        vertices: Boundary walk order, coordinates rounded for storage.
        area_square_meters: Spherical area of the ring at save time.
        point_count: Number of vertices (always ``len(vertices)``).
        saved_at: Save timestamp (ISO 8601, UTC).
        centroid: Ring centroid, for re-centring the map on the parcel.
        bounding_box: ``[min_lng, min_lat, max_lng, max_lat]``.
    """

    schema_version: str = Field(default=SCHEMA_VERSION, alias="$schema")
    boundary_id: str = Field(default="", alias="boundaryId")
    vertices: list[VertexPayload] = Field(default_factory=list)
    area_square_meters: float = Field(default=0.0, ge=0.0, alias="areaSquareMeters")
    point_count: int = Field(default=0, ge=0, alias="pointCount")
    saved_at: str = Field(default="", alias="savedAt")
    centroid: VertexPayload | None = None
    bounding_box: list[float] = Field(default_factory=list, alias="boundingBox")

    model_config = {"populate_by_name": True, "frozen": True}

    @classmethod
    def from_vertices(
        cls,
        vertices: Sequence[Vertex],
        *,
        area_m2: float,
        boundary_id: str = "",
        saved_at: str = "",
        precision: int = COORDINATE_PRECISION,
    ) -> BoundaryRecord:
        """Build a snapshot from the editor's vertex sequence.

        Args:
            vertices: Current vertices in walk order (three or more).
            area_m2: Area computed from the unrounded vertices.
            boundary_id: Owner identifier.
            saved_at: Save timestamp; current UTC time when empty.
            precision: Decimal places kept for each coordinate.
        """
        if not saved_at:
            saved_at = datetime.now(UTC).isoformat()

        rounded = [v.rounded(precision) for v in vertices]
        centroid_lat, centroid_lng = compute_centroid(vertices)

        return cls(
            boundary_id=boundary_id,
            vertices=[VertexPayload(lat=v.lat, lng=v.lng) for v in rounded],
            area_square_meters=area_m2,
            point_count=len(rounded),
            saved_at=saved_at,
            centroid=VertexPayload(
                lat=round(centroid_lat, precision),
                lng=round(centroid_lng, precision),
            ),
            bounding_box=list(compute_bbox(rounded)),
        )

    @classmethod
    def from_dict(cls, data: object) -> BoundaryRecord:
        """Validate a stored document.

        Raises:
            ContractError: If the document does not match the schema or
                ``pointCount`` disagrees with the vertex list.
        """
        try:
            record = cls.model_validate(data)
        except PydanticValidationError as exc:
            msg = f"Stored boundary does not match {SCHEMA_VERSION}: {exc.error_count()} error(s)"
            raise ContractError(msg, code="BOUNDARY_RECORD_INVALID") from exc
        return _check_point_count(record)

    @classmethod
    def from_json(cls, payload: str | bytes) -> BoundaryRecord:
        """Parse and validate a stored JSON document.

        Raises:
            ContractError: If the payload is not valid JSON or not a
                valid boundary document.
        """
        try:
            record = cls.model_validate_json(payload)
        except PydanticValidationError as exc:
            msg = (
                f"Stored boundary is not a valid {SCHEMA_VERSION} document: "
                f"{exc.error_count()} error(s)"
            )
            raise ContractError(msg, code="BOUNDARY_RECORD_INVALID") from exc
        return _check_point_count(record)

    def to_json(self, *, indent: int = 2) -> str:
        """Serialise to a JSON string using the wire aliases."""
        return self.model_dump_json(indent=indent, by_alias=True)

    def to_dict(self) -> dict[str, object]:
        """Serialise to a plain dict using the wire aliases."""
        return self.model_dump(by_alias=True)  # type: ignore[return-value]

    def to_vertices(self) -> list[Vertex]:
        """Return the stored vertices as editor ``Vertex`` objects."""
        return [v.to_vertex() for v in self.vertices]

    @property
    def area_hectares(self) -> float:
        return self.area_square_meters / SQ_METRES_PER_HECTARE

    def area_display(self) -> str:
        """Format the area the way the field screen shows it."""
        return f"{self.area_hectares:.{AREA_DISPLAY_PRECISION}f} hectares"


def _check_point_count(record: BoundaryRecord) -> BoundaryRecord:
    """Reject documents whose ``pointCount`` disagrees with ``vertices``."""
    if record.point_count != len(record.vertices):
        msg = (
            f"Stored boundary pointCount={record.point_count} "
            f"but has {len(record.vertices)} vertices"
        )
        raise ContractError(msg, code="BOUNDARY_RECORD_INVALID")
    return record
