"""Events emitted by the boundary editor for the presentation layer.

The editor never renders anything. Every state change is announced as
one of these immutable events so a map view (or a test) can follow the
boundary without reading editor internals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from paddy_boundary.core.exceptions import RejectionReason
    from paddy_boundary.models.vertex import Vertex

logger = logging.getLogger("paddy_boundary.models.events")


@dataclass(frozen=True, slots=True)
class PointAdded:
    index: int
    vertex: Vertex


@dataclass(frozen=True, slots=True)
class PointRejected:
    reason: RejectionReason
    message: str


@dataclass(frozen=True, slots=True)
class PointRemoved:
    index: int


@dataclass(frozen=True, slots=True)
class Cleared:
    pass


@dataclass(frozen=True, slots=True)
class Locked:
    """The boundary was saved and is now immutable.

    Attributes:
        area_m2: Enclosed area at the moment of saving, square metres.
    """

    area_m2: float


@dataclass(frozen=True, slots=True)
class UnlockRequested:
    pass


@dataclass(frozen=True, slots=True)
class Unlocked:
    pass


BoundaryEvent = (
    PointAdded | PointRejected | PointRemoved | Cleared | Locked | UnlockRequested | Unlocked
)


class EventDispatcher:
    """Fan-out of boundary events to registered listeners, in order."""

    def __init__(self) -> None:
        self._listeners: list[Callable[[BoundaryEvent], None]] = []

    def subscribe(self, listener: Callable[[BoundaryEvent], None]) -> Callable[[], None]:
        """Register *listener* and return a function that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def emit(self, event: BoundaryEvent) -> None:
        logger.debug("Event emitted | type=%s", type(event).__name__)
        for listener in list(self._listeners):
            listener(event)
