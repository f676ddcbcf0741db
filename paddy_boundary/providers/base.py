"""Ports the boundary editor consumes: persistence and device location.

The lifecycle manager talks only to these interfaces. It never knows
which storage backend or location source is behind them.

Persistence:
    ``save(record)`` stores a locked snapshot; ``load(boundary_id)``
    returns the latest snapshot for a boundary, or ``None``.

Geolocation:
    ``current_position(timeout_ms=..., high_accuracy=...)`` returns one
    fix. There is no watch/stream mode.

Both ports are asynchronous; they are the only places the editor
suspends.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from paddy_boundary.core.exceptions import LocationError, PersistError

if TYPE_CHECKING:
    from paddy_boundary.core.config import BoundaryConfig
    from paddy_boundary.models.boundary import BoundaryRecord
    from paddy_boundary.models.vertex import Vertex


class BoundaryStore(abc.ABC):
    """Abstract base class for boundary persistence adapters.

    Concrete stores must override ``save`` and ``load`` and must raise
    ``BoundaryStoreError`` (a ``PersistError``) for every failure, never
    a library exception.
    """

    #: Registry name of the adapter.
    name: str = ""

    @classmethod
    def from_config(cls, config: BoundaryConfig) -> BoundaryStore:
        """Build the adapter from configuration (default: no arguments)."""
        return cls()

    @abc.abstractmethod
    async def save(self, record: BoundaryRecord) -> None:
        """Persist *record*, replacing any earlier snapshot for its boundary.

        Raises:
            BoundaryStoreError: If the snapshot could not be stored.
        """

    @abc.abstractmethod
    async def load(self, boundary_id: str) -> BoundaryRecord | None:
        """Return the latest snapshot for *boundary_id*, or ``None``.

        Raises:
            BoundaryStoreError: If the store could not be read.
        """


class GeolocationProvider(abc.ABC):
    """Abstract base class for one-shot device location sources."""

    @abc.abstractmethod
    async def current_position(self, *, timeout_ms: int, high_accuracy: bool) -> Vertex:
        """Return the device position.

        Args:
            timeout_ms: Upper bound for the request in milliseconds.
            high_accuracy: Ask the source for its most precise fix.

        Raises:
            LocationError: If the position is unavailable or denied.
        """


# ---------------------------------------------------------------------------
# Adapter exceptions
# ---------------------------------------------------------------------------


class BoundaryStoreError(PersistError):
    """A persistence adapter failed.

    Attributes:
        store: Name of the adapter that raised the error.
    """

    default_stage = "boundary_store"
    default_code = "BOUNDARY_STORE_FAILED"

    def __init__(self, store: str, message: str, *, retryable: bool = True) -> None:
        self.store = store
        super().__init__(message, retryable=retryable)

    def __str__(self) -> str:
        return f"[{self.store}] {self.message}"


class LocationUnavailableError(LocationError):
    """The location source has no fix to offer."""

    default_code = "LOCATION_UNAVAILABLE"


class LocationRequestError(LocationError):
    """The location request failed (transport or malformed reply)."""

    default_code = "LOCATION_REQUEST_FAILED"
