"""Boundary error taxonomy.

Every domain exception inherits from ``BoundaryError`` and carries
structured context fields so callers can decide whether to retry and
what to show the operator.

Taxonomy categories
-------------------
- ``ValidationError``  — a point or input broke a geometric rule; the
  polygon is unchanged and the same input will fail again.
- ``LifecycleError``   — the command is not allowed in the current
  lifecycle state (locked, saving, not ready); retry after it changes.
- ``PersistError``     — the persistence port failed; the boundary stays
  in Draft so the save can be retried without re-entering points.
- ``LocationError``    — the device position is unavailable; callers fall
  back to a fixed coordinate.
- ``ContractError``    — malformed payload or persisted record.

Nothing here is fatal: every failure leaves the boundary in the state it
had before the command.
"""

from __future__ import annotations

import enum


class BoundaryError(Exception):
    """Base exception for all boundary-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Component where the error occurred
            (e.g. ``"validator"``, ``"lifecycle"``, ``"blob_store"``).
        code: Machine-readable error code (e.g. ``"POINT_TOO_CLOSE"``).
        retryable: Whether the caller may retry the same operation later.
        correlation_id: Request correlation identifier.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.correlation_id = correlation_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, LifecycleError):
            return "lifecycle"
        if isinstance(self, PersistError):
            return "persist"
        if isinstance(self, LocationError):
            return "location"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "correlation_id": self.correlation_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(BoundaryError):
    """A candidate point or coordinate input was rejected. Never retryable."""

    default_stage = "validator"
    default_code = "VALIDATION_FAILED"

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class LifecycleError(BoundaryError):
    """Command not allowed in the current lifecycle state."""

    default_stage = "lifecycle"
    default_code = "LIFECYCLE_VIOLATION"

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PersistError(BoundaryError):
    """The persistence port failed to store or fetch a boundary."""

    default_stage = "persistence"
    default_code = "PERSIST_FAILED"

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class LocationError(BoundaryError):
    """Device location unavailable, denied, or timed out."""

    default_stage = "geolocation"
    default_code = "LOCATION_UNAVAILABLE"

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ContractError(BoundaryError):
    """Payload or persisted record does not match the expected shape."""

    default_stage = "contract"
    default_code = "CONTRACT_VIOLATION"

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Concrete validation errors
# ---------------------------------------------------------------------------


class RejectionReason(enum.Enum):
    """Why a point command was refused."""

    MAX_POINTS = "max_points"
    TOO_CLOSE = "too_close"
    SELF_INTERSECTION = "self_intersection"
    NOT_LAST_POINT = "not_last_point"
    NOTHING_TO_UNDO = "nothing_to_undo"
    INVALID_COORDINATE = "invalid_coordinate"


_REJECTION_CODES: dict[RejectionReason, str] = {
    RejectionReason.MAX_POINTS: "MAX_POINTS_REACHED",
    RejectionReason.TOO_CLOSE: "POINT_TOO_CLOSE",
    RejectionReason.SELF_INTERSECTION: "SELF_INTERSECTION",
    RejectionReason.NOT_LAST_POINT: "NOT_LAST_POINT",
    RejectionReason.NOTHING_TO_UNDO: "NOTHING_TO_UNDO",
    RejectionReason.INVALID_COORDINATE: "COORDINATE_INVALID",
}


class PointRejectedError(ValidationError):
    """A point command was refused by a boundary rule.

    Attributes:
        reason: The rule that refused the command.
    """

    def __init__(self, reason: RejectionReason, message: str) -> None:
        self.reason = reason
        super().__init__(message, code=_REJECTION_CODES[reason])


class InvalidCoordinateError(ValidationError):
    """Coordinate text is not a number or lies outside WGS 84 bounds."""

    default_code = "COORDINATE_INVALID"
    reason = RejectionReason.INVALID_COORDINATE


# ---------------------------------------------------------------------------
# Concrete lifecycle errors
# ---------------------------------------------------------------------------


class BoundaryLockedError(LifecycleError):
    """Mutation attempted while the boundary is locked."""

    default_code = "BOUNDARY_LOCKED"


class SaveInProgressError(LifecycleError):
    """Mutation or second save attempted while a save is in flight."""

    default_code = "SAVE_IN_PROGRESS"


class BoundaryNotReadyError(LifecycleError):
    """Save requested before the polygon has enough points."""

    default_code = "BOUNDARY_NOT_READY"


class UnlockNotRequestedError(LifecycleError):
    """Unlock confirmed without a pending unlock request."""

    default_code = "UNLOCK_NOT_REQUESTED"


class BoundaryNotLockedError(LifecycleError):
    """Unlock requested for a boundary that is not locked."""

    default_code = "BOUNDARY_NOT_LOCKED"


class ViewModeError(LifecycleError):
    """Editing command issued while the screen is in view mode."""

    default_code = "VIEW_MODE"
