"""Data models and schemas.

- Vertex: one WGS 84 boundary point
- BoundaryRecord: persisted, locked snapshot of a saved boundary
- events: state-change notifications for the presentation layer
- payloads: HTTP request/response contracts
"""

from paddy_boundary.models.boundary import BoundaryRecord
from paddy_boundary.models.vertex import (
    Vertex,
    make_vertex,
    parse_coordinate_input,
    point_label,
    validate_wgs84_coordinate,
)

__all__ = [
    "BoundaryRecord",
    "Vertex",
    "make_vertex",
    "parse_coordinate_input",
    "point_label",
    "validate_wgs84_coordinate",
]
