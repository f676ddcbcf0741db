"""Submit-boundary activity.

A client that drew a boundary offline (or on a device whose editor state
is not trusted) submits the whole vertex list at once. Every vertex is
replayed, in order, through a fresh editor so the server applies exactly
the same capacity, spacing, and self-intersection rules as the map
screen. The boundary is then saved through the configured store and
returned as a locked snapshot.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from paddy_boundary.core.exceptions import (
    ContractError,
    InvalidCoordinateError,
    PointRejectedError,
)
from paddy_boundary.editing.lifecycle import BoundaryLifecycleManager
from paddy_boundary.models.payloads import (
    SubmitBoundaryInput,
    SubmitBoundaryOutput,
    validate_payload,
)
from paddy_boundary.models.vertex import Vertex, point_label
from paddy_boundary.utils.helpers import parse_timestamp

if TYPE_CHECKING:
    from paddy_boundary.core.config import BoundaryConfig
    from paddy_boundary.providers.base import BoundaryStore

logger = logging.getLogger("paddy_boundary.activities.submit_boundary")


async def submit_boundary(
    payload: dict[str, Any],
    *,
    boundary_id: str,
    store: BoundaryStore,
    config: BoundaryConfig | None = None,
) -> SubmitBoundaryOutput:
    """Validate and save a complete boundary.

    Args:
        payload: Request body matching ``SubmitBoundaryInput``.
        boundary_id: Owner identifier (from the route).
        store: Persistence port.
        config: Geometry rules; defaults to ``BoundaryConfig()``.

    Returns:
        The saved snapshot plus its area in hectares.

    Raises:
        ContractError: If the payload or one of its vertices is malformed.
        InvalidCoordinateError: If a vertex is out of range; the message
            names the offending point.
        PointRejectedError: If a vertex breaks a boundary rule; the
            message names the offending point.
        BoundaryNotReadyError: If fewer vertices than a closed ring needs.
        PersistError: If the store failed.
    """
    if not boundary_id.strip():
        msg = "submit_boundary: boundary_id must be non-empty"
        raise ContractError(msg, stage="submit_boundary", code="MISSING_BOUNDARY_ID")

    validate_payload(payload, SubmitBoundaryInput, activity="submit_boundary")
    raw_vertices = payload["vertices"]
    if not isinstance(raw_vertices, list):
        msg = f"submit_boundary: vertices must be a list, got {type(raw_vertices).__name__}"
        raise ContractError(msg, stage="submit_boundary", code="INVALID_VERTICES")

    correlation_id = str(payload.get("correlation_id", ""))
    saved_at = str(payload.get("saved_at", ""))
    clock = (lambda: parse_timestamp(saved_at)) if saved_at else None

    manager = BoundaryLifecycleManager(
        store, boundary_id=boundary_id, config=config, clock=clock
    )

    for index, raw in enumerate(raw_vertices):
        try:
            vertex = Vertex.from_dict(raw)
        except InvalidCoordinateError as exc:
            msg = f"Point {_label(index)}: {exc.message}"
            raise InvalidCoordinateError(msg, stage="submit_boundary") from exc
        except ContractError as exc:
            msg = f"Point {_label(index)}: {exc.message}"
            raise ContractError(msg, stage="submit_boundary", code=exc.code) from exc

        try:
            manager.add_point(vertex.lat, vertex.lng)
        except PointRejectedError as exc:
            message = f"Point {_label(index)}: {exc.message}"
            logger.info(
                "Submitted boundary rejected | boundary=%s | index=%d | reason=%s | correlation_id=%s",
                boundary_id,
                index,
                exc.reason.value,
                correlation_id,
            )
            raise PointRejectedError(exc.reason, message) from exc

    record = await manager.request_save()

    logger.info(
        "Submitted boundary saved | boundary=%s | points=%d | area=%.4f ha | correlation_id=%s",
        boundary_id,
        record.point_count,
        record.area_hectares,
        correlation_id,
    )

    return {
        "boundary": record.to_dict(),
        "area_hectares": record.area_hectares,
        "area_display": record.area_display(),
    }


def _label(index: int) -> str:
    return point_label(index) if index < 26 else str(index + 1)
