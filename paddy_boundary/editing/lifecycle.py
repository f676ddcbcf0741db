"""Draft/Locked lifecycle of one boundary.

``BoundaryLifecycleManager`` owns a ``PolygonState`` and drives it
through the save and unlock workflows:

    Draft ──request_save() ok──▶ Locked
      ▲                            │
      │                     request_unlock()
      │                            ▼
      └──confirm_unlock()── Locked (unlock pending)

- ``request_save`` is the only way into Locked. It computes the area,
  hands a snapshot to the persistence port, and locks only after the
  port succeeds. A failed save leaves the boundary in Draft, untouched,
  so the operator can retry without re-entering points.
- Unlocking takes two calls. ``request_unlock`` only marks the request;
  nothing changes until ``confirm_unlock``. ``cancel_unlock`` drops it.

While a save is awaiting the port, the polygon refuses every mutation.
That flag is the only mutual exclusion: one manager owns one polygon.
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING

from paddy_boundary.core.config import BoundaryConfig
from paddy_boundary.core.exceptions import (
    BoundaryLockedError,
    BoundaryNotLockedError,
    BoundaryNotReadyError,
    PersistError,
    SaveInProgressError,
    UnlockNotRequestedError,
    ViewModeError,
)
from paddy_boundary.editing.polygon_state import BoundaryShape, PolygonState
from paddy_boundary.geometry.kernel import perimeter_meters, spherical_area_m2
from paddy_boundary.models.boundary import BoundaryRecord
from paddy_boundary.models.events import (
    EventDispatcher,
    Locked,
    UnlockRequested,
    Unlocked,
)
from paddy_boundary.utils.helpers import utc_now

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from datetime import datetime

    from paddy_boundary.models.events import BoundaryEvent
    from paddy_boundary.models.vertex import Vertex
    from paddy_boundary.providers.base import BoundaryStore

logger = logging.getLogger("paddy_boundary.editing.lifecycle")


class LifecycleState(enum.Enum):
    """Whether the boundary may be edited.

    Values:
        DRAFT:  Mutable; commands are accepted subject to validation.
        LOCKED: Saved and frozen until an unlock is confirmed.
    """

    DRAFT = "draft"
    LOCKED = "locked"


class BoundaryLifecycleManager:
    """Save/lock/unlock orchestration for one boundary.

    Args:
        store: Persistence port used by ``request_save``.
        boundary_id: Owner identifier written into every snapshot.
        config: Geometry rules and coordinate precision.
        clock: Returns the save timestamp; UTC now by default.
    """

    def __init__(
        self,
        store: BoundaryStore,
        *,
        boundary_id: str = "",
        config: BoundaryConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._boundary_id = boundary_id
        self._config = config or BoundaryConfig()
        self._clock = clock or utc_now
        self._dispatcher = EventDispatcher()
        self._polygon = PolygonState.from_config(
            self._config,
            dispatcher=self._dispatcher,
            boundary_id=boundary_id,
        )
        self._unlock_pending = False
        self._edit_mode = True
        self._last_record: BoundaryRecord | None = None

    @classmethod
    def from_saved(
        cls,
        store: BoundaryStore,
        vertices: Iterable[Vertex],
        *,
        has_saved_boundary: bool,
        boundary_id: str = "",
        config: BoundaryConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> BoundaryLifecycleManager:
        """Seed a manager from a boundary the caller already holds.

        With ``has_saved_boundary`` the vertices are loaded and the
        boundary starts Locked in view mode; otherwise they are loaded
        into a Draft. A saved flag whose vertices do not form a closed
        ring is ignored with a warning.
        """
        manager = cls(store, boundary_id=boundary_id, config=config, clock=clock)
        manager._polygon.seed(vertices)
        if has_saved_boundary:
            if not manager._polygon.is_ready:
                logger.warning(
                    "Saved boundary flag set without a closed ring | boundary=%s | points=%d",
                    boundary_id,
                    len(manager._polygon),
                )
            else:
                manager._polygon.lock()
                manager._edit_mode = False
        logger.info(
            "Lifecycle seeded | boundary=%s | points=%d | state=%s",
            boundary_id,
            len(manager._polygon),
            manager.state.value,
        )
        return manager

    @classmethod
    def from_record(
        cls,
        store: BoundaryStore,
        record: BoundaryRecord,
        *,
        config: BoundaryConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> BoundaryLifecycleManager:
        """Seed a Locked manager from a persisted snapshot."""
        manager = cls.from_saved(
            store,
            record.to_vertices(),
            has_saved_boundary=True,
            boundary_id=record.boundary_id,
            config=config,
            clock=clock,
        )
        manager._last_record = record
        return manager

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> LifecycleState:
        return LifecycleState.LOCKED if self._polygon.is_locked else LifecycleState.DRAFT

    @property
    def is_locked(self) -> bool:
        return self._polygon.is_locked

    @property
    def is_saving(self) -> bool:
        return self._polygon.is_saving

    @property
    def unlock_pending(self) -> bool:
        return self._unlock_pending

    @property
    def edit_mode(self) -> bool:
        return self._edit_mode

    @property
    def shape(self) -> BoundaryShape:
        return self._polygon.shape

    @property
    def vertices(self) -> tuple[Vertex, ...]:
        return self._polygon.vertices

    @property
    def boundary_id(self) -> str:
        return self._boundary_id

    @property
    def last_record(self) -> BoundaryRecord | None:
        """Snapshot from the most recent successful save (or the seed record)."""
        return self._last_record

    def area_m2(self) -> float:
        return self._polygon.area_m2()

    def subscribe(self, listener: Callable[[BoundaryEvent], None]) -> Callable[[], None]:
        """Register an event listener; returns its unsubscribe function."""
        return self._dispatcher.subscribe(listener)

    # ------------------------------------------------------------------
    # Editing commands (delegated; the polygon enforces the lock guards)
    # ------------------------------------------------------------------

    def add_point(self, lat: float, lng: float) -> Vertex:
        self._ensure_edit_mode()
        return self._polygon.add_point(lat, lng)

    def add_point_from_input(self, lat_text: str, lng_text: str) -> Vertex:
        self._ensure_edit_mode()
        return self._polygon.add_point_from_input(lat_text, lng_text)

    def undo_last(self) -> Vertex:
        self._ensure_edit_mode()
        return self._polygon.undo_last()

    def remove_point(self, index: int) -> Vertex:
        self._ensure_edit_mode()
        return self._polygon.remove_point(index)

    def clear(self) -> None:
        self._ensure_edit_mode()
        self._polygon.clear()

    def _ensure_edit_mode(self) -> None:
        """Refuse edits on a Draft boundary shown in view mode.

        A locked boundary is left to the polygon, which reports
        ``BoundaryLockedError``.
        """
        if not self._edit_mode and not self._polygon.is_locked:
            msg = "Boundary is in view mode. Switch to edit mode to change it."
            raise ViewModeError(msg)

    # ------------------------------------------------------------------
    # View / edit mode
    # ------------------------------------------------------------------

    def enter_edit_mode(self) -> None:
        """Switch to edit mode.

        Raises:
            BoundaryLockedError: If the boundary is locked; the unlock
                workflow must be used instead.
        """
        if self._polygon.is_locked:
            msg = "Boundary is locked. Request an unlock to edit it."
            raise BoundaryLockedError(msg)
        self._edit_mode = True

    def exit_edit_mode(self) -> None:
        """Switch to view mode; editing commands raise ``ViewModeError``."""
        self._edit_mode = False

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    async def request_save(self) -> BoundaryRecord:
        """Persist the boundary and lock it.

        Returns:
            The snapshot handed to the persistence port.

        Raises:
            BoundaryLockedError: If the boundary is already locked.
            SaveInProgressError: If another save is still in flight.
            BoundaryNotReadyError: If the polygon is not a closed ring yet.
            PersistError: If the port failed; the boundary stays in Draft.
        """
        if self._polygon.is_locked:
            msg = "Boundary is already saved and locked"
            raise BoundaryLockedError(msg)
        if self._polygon.is_saving:
            msg = "A save is already in progress"
            raise SaveInProgressError(msg)
        if not self._polygon.is_ready:
            msg = (
                f"At least {self._config.min_points} points are needed to save a boundary "
                f"(have {len(self._polygon)})"
            )
            raise BoundaryNotReadyError(msg)

        vertices = self._polygon.vertices
        area_m2 = spherical_area_m2(vertices)
        record = BoundaryRecord.from_vertices(
            vertices,
            area_m2=area_m2,
            boundary_id=self._boundary_id,
            saved_at=self._clock().isoformat(),
            precision=self._config.coordinate_precision,
        )

        logger.info(
            "Saving boundary | boundary=%s | points=%d | area=%.2f m2 | perimeter=%.1f m",
            self._boundary_id,
            record.point_count,
            area_m2,
            perimeter_meters(vertices),
        )

        self._polygon.set_saving(True)
        try:
            await self._store.save(record)
        except PersistError as exc:
            logger.warning(
                "Boundary save failed | boundary=%s | code=%s | retryable=%s | error=%s",
                self._boundary_id,
                exc.code,
                exc.retryable,
                exc.message,
            )
            raise
        finally:
            self._polygon.set_saving(False)

        self._polygon.lock()
        self._edit_mode = False
        self._unlock_pending = False
        self._last_record = record
        logger.info(
            "Boundary locked | boundary=%s | area=%.2f m2 | saved_at=%s",
            self._boundary_id,
            area_m2,
            record.saved_at,
        )
        self._dispatcher.emit(Locked(area_m2=area_m2))
        return record

    # ------------------------------------------------------------------
    # Two-phase unlock
    # ------------------------------------------------------------------

    def request_unlock(self) -> None:
        """Mark an unlock as pending; the boundary stays locked.

        Raises:
            BoundaryNotLockedError: If the boundary is not locked.
        """
        if not self._polygon.is_locked:
            msg = "Boundary is not locked"
            raise BoundaryNotLockedError(msg)
        self._unlock_pending = True
        logger.info("Unlock requested | boundary=%s", self._boundary_id)
        self._dispatcher.emit(UnlockRequested())

    def confirm_unlock(self) -> None:
        """Complete a pending unlock and return to Draft in edit mode.

        Raises:
            UnlockNotRequestedError: If ``request_unlock`` was not called first.
        """
        if not self._unlock_pending:
            msg = "Unlock must be requested before it can be confirmed"
            raise UnlockNotRequestedError(msg)
        self._unlock_pending = False
        self._polygon.unlock()
        self._edit_mode = True
        logger.info("Boundary unlocked | boundary=%s", self._boundary_id)
        self._dispatcher.emit(Unlocked())

    def cancel_unlock(self) -> None:
        """Drop a pending unlock request. No-op if none is pending."""
        if self._unlock_pending:
            logger.info("Unlock cancelled | boundary=%s", self._boundary_id)
        self._unlock_pending = False
