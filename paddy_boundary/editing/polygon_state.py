"""Authoritative vertex sequence for one boundary being edited.

``PolygonState`` is the single owner of the boundary's vertices. Every
change goes through one of its commands, and every command either
succeeds completely or raises with the vertices untouched:

- ``add_point`` / ``add_point_from_input``: validate, snap, append.
- ``undo_last`` / ``remove_point``: pop the most recent vertex only.
- ``clear``: drop every vertex.

Removal is undo-stack only. Deleting from the middle of the ring would
join two vertices that were never checked against each other, so the
self-intersection rule (which is checked incrementally at append time)
would no longer hold. ``VertexStack`` has no insert or delete-at-index
operation, which keeps that constraint structural.

While the owning lifecycle is locked, or while a save is in flight,
every mutating command raises a ``LifecycleError``.
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING

from paddy_boundary.core.constants import MIN_POINTS, SNAP_TOLERANCE_M
from paddy_boundary.core.exceptions import (
    BoundaryLockedError,
    InvalidCoordinateError,
    PointRejectedError,
    RejectionReason,
    SaveInProgressError,
)
from paddy_boundary.geometry.kernel import spherical_area_m2
from paddy_boundary.geometry.snap import snap_point
from paddy_boundary.geometry.validator import BoundaryValidator
from paddy_boundary.models.events import (
    Cleared,
    EventDispatcher,
    PointAdded,
    PointRejected,
    PointRemoved,
)
from paddy_boundary.models.vertex import (
    make_vertex,
    parse_coordinate_input,
    validate_wgs84_coordinate,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from paddy_boundary.core.config import BoundaryConfig
    from paddy_boundary.models.vertex import Vertex

logger = logging.getLogger("paddy_boundary.editing.polygon_state")


class BoundaryShape(enum.Enum):
    """How far the boundary has progressed.

    Values:
        EMPTY:    No vertices yet.
        BUILDING: Fewer vertices than needed for a closed ring.
        READY:    A closed ring that can be rendered, measured, and saved.
    """

    EMPTY = "empty"
    BUILDING = "building"
    READY = "ready"


class VertexStack:
    """Append/pop-only vertex storage.

    Supports indexed reads but no positional insert or delete.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Vertex] = ()) -> None:
        self._items: list[Vertex] = list(items)

    def push(self, vertex: Vertex) -> int:
        """Append *vertex* and return its index."""
        self._items.append(vertex)
        return len(self._items) - 1

    def pop(self) -> Vertex:
        """Remove and return the most recent vertex.

        Raises:
            IndexError: If the stack is empty.
        """
        return self._items.pop()

    def clear(self) -> None:
        self._items.clear()

    def snapshot(self) -> tuple[Vertex, ...]:
        """Return an immutable copy of the current sequence."""
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Vertex:
        return self._items[index]

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._items)


class PolygonState:
    """Ordered boundary vertices plus the locked/saving guards.

    Args:
        validator: Rule set applied to every new point.
        snap_tolerance_m: Snap radius in metres.
        min_points: Vertices needed for the ``READY`` shape.
        dispatcher: Receives ``PointAdded``, ``PointRejected``,
            ``PointRemoved``, and ``Cleared`` events.
        boundary_id: Owner identifier, used in log lines.
    """

    def __init__(
        self,
        *,
        validator: BoundaryValidator | None = None,
        snap_tolerance_m: float = SNAP_TOLERANCE_M,
        min_points: int = MIN_POINTS,
        dispatcher: EventDispatcher | None = None,
        boundary_id: str = "",
    ) -> None:
        self._validator = validator or BoundaryValidator()
        self._snap_tolerance_m = snap_tolerance_m
        self._min_points = min_points
        self._dispatcher = dispatcher or EventDispatcher()
        self._boundary_id = boundary_id
        self._stack = VertexStack()
        self._locked = False
        self._saving = False

    @classmethod
    def from_config(
        cls,
        config: BoundaryConfig,
        *,
        dispatcher: EventDispatcher | None = None,
        boundary_id: str = "",
    ) -> PolygonState:
        return cls(
            validator=BoundaryValidator.from_config(config),
            snap_tolerance_m=config.snap_tolerance_m,
            min_points=config.min_points,
            dispatcher=dispatcher,
            boundary_id=boundary_id,
        )

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def vertices(self) -> tuple[Vertex, ...]:
        """Current vertices in walk order (an immutable copy)."""
        return self._stack.snapshot()

    @property
    def shape(self) -> BoundaryShape:
        count = len(self._stack)
        if count == 0:
            return BoundaryShape.EMPTY
        if count < self._min_points:
            return BoundaryShape.BUILDING
        return BoundaryShape.READY

    @property
    def is_ready(self) -> bool:
        return self.shape is BoundaryShape.READY

    @property
    def is_locked(self) -> bool:
        return self._locked

    @property
    def is_saving(self) -> bool:
        return self._saving

    @property
    def dispatcher(self) -> EventDispatcher:
        return self._dispatcher

    def area_m2(self) -> float:
        """Enclosed area of the current ring, or ``0.0`` if not ready."""
        if not self.is_ready:
            return 0.0
        return spherical_area_m2(self._stack.snapshot())

    def __len__(self) -> int:
        return len(self._stack)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add_point(self, lat: float, lng: float) -> Vertex:
        """Validate, snap, and append a point.

        Returns:
            The vertex actually appended (the candidate, or the existing
            vertex it snapped to).

        Raises:
            LifecycleError: If the boundary is locked or being saved.
            InvalidCoordinateError: If the coordinate is out of range.
            PointRejectedError: If a boundary rule refuses the point.
        """
        self._ensure_mutable()
        try:
            candidate = make_vertex(lat, lng)
        except InvalidCoordinateError as exc:
            self._reject(exc.reason, exc.message)
            raise
        return self._append(candidate)

    def add_point_from_input(self, lat_text: str, lng_text: str) -> Vertex:
        """Parse typed coordinates, then behave like ``add_point``.

        Raises:
            LifecycleError: If the boundary is locked or being saved.
            InvalidCoordinateError: If the text is not a valid coordinate.
            PointRejectedError: If a boundary rule refuses the point.
        """
        self._ensure_mutable()
        try:
            candidate = parse_coordinate_input(lat_text, lng_text)
        except InvalidCoordinateError as exc:
            self._reject(exc.reason, exc.message)
            raise
        return self._append(candidate)

    def undo_last(self) -> Vertex:
        """Remove and return the most recent vertex.

        Raises:
            LifecycleError: If the boundary is locked or being saved.
            PointRejectedError: If there is nothing to remove.
        """
        self._ensure_mutable()
        if not self._stack:
            message = "There are no points to remove"
            self._reject(RejectionReason.NOTHING_TO_UNDO, message)
            raise PointRejectedError(RejectionReason.NOTHING_TO_UNDO, message)

        index = len(self._stack) - 1
        removed = self._stack.pop()
        logger.info(
            "Point removed | boundary=%s | index=%d | remaining=%d",
            self._boundary_id,
            index,
            len(self._stack),
        )
        self._dispatcher.emit(PointRemoved(index=index))
        return removed

    def remove_point(self, index: int) -> Vertex:
        """Remove the vertex at *index*, which must be the most recent one.

        Raises:
            LifecycleError: If the boundary is locked or being saved.
            PointRejectedError: If *index* is not the last index.
        """
        self._ensure_mutable()
        if index != len(self._stack) - 1:
            message = (
                "Only the most recent point can be removed. Use Undo to remove the last point."
            )
            self._reject(RejectionReason.NOT_LAST_POINT, message)
            raise PointRejectedError(RejectionReason.NOT_LAST_POINT, message)
        return self.undo_last()

    def clear(self) -> None:
        """Drop every vertex.

        Raises:
            LifecycleError: If the boundary is locked or being saved.
        """
        self._ensure_mutable()
        removed = len(self._stack)
        self._stack.clear()
        logger.info("Boundary cleared | boundary=%s | removed=%d", self._boundary_id, removed)
        self._dispatcher.emit(Cleared())

    # ------------------------------------------------------------------
    # Lifecycle guards (driven by BoundaryLifecycleManager)
    # ------------------------------------------------------------------

    def lock(self) -> None:
        """Freeze the vertex sequence."""
        self._locked = True

    def unlock(self) -> None:
        """Allow mutation again."""
        self._locked = False

    def set_saving(self, saving: bool) -> None:
        """Flag that a save is in flight; mutations are refused meanwhile."""
        self._saving = saving

    def seed(self, vertices: Iterable[Vertex]) -> None:
        """Replace the vertices with a previously saved sequence.

        Saved boundaries were validated when they were drawn, so only the
        capacity and coordinate ranges are re-checked here.

        Raises:
            LifecycleError: If the boundary is locked or being saved.
            InvalidCoordinateError: If a stored coordinate is out of range.
            PointRejectedError: If there are more vertices than allowed.
        """
        self._ensure_mutable()
        items = list(vertices)
        if len(items) > self._validator.max_points:
            raise PointRejectedError(
                RejectionReason.MAX_POINTS,
                f"Saved boundary has {len(items)} points, "
                f"maximum is {self._validator.max_points}",
            )
        for vertex in items:
            validate_wgs84_coordinate(vertex.lat, vertex.lng)
        self._stack = VertexStack(items)
        logger.info("Boundary seeded | boundary=%s | points=%d", self._boundary_id, len(items))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_mutable(self) -> None:
        if self._locked:
            msg = "Boundary is locked. Unlock it before making changes."
            raise BoundaryLockedError(msg)
        if self._saving:
            msg = "Boundary is being saved. Wait for the save to finish."
            raise SaveInProgressError(msg)

    def _append(self, candidate: Vertex) -> Vertex:
        vertices = self._stack.snapshot()
        result = self._validator.validate(candidate, vertices)
        if not result.accepted:
            self._reject(result.reason, result.message)  # type: ignore[arg-type]
            result.raise_if_rejected()

        vertex = snap_point(candidate, vertices, tolerance_m=self._snap_tolerance_m)
        index = self._stack.push(vertex)
        logger.info(
            "Point added | boundary=%s | index=%d | lat=%.8f | lng=%.8f | shape=%s",
            self._boundary_id,
            index,
            vertex.lat,
            vertex.lng,
            self.shape.value,
        )
        self._dispatcher.emit(PointAdded(index=index, vertex=vertex))
        return vertex

    def _reject(self, reason: RejectionReason, message: str) -> None:
        logger.info(
            "Point rejected | boundary=%s | reason=%s | points=%d",
            self._boundary_id,
            reason.value,
            len(self._stack),
        )
        self._dispatcher.emit(PointRejected(reason=reason, message=message))
