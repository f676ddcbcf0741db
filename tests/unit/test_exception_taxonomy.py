"""Tests for the boundary exception taxonomy.

Validates:
- BoundaryError base attributes and ``to_error_dict()`` keys
- Category classification (validation, lifecycle, persist, location, contract)
- Retry semantics per category
- Every domain exception is a BoundaryError with a stage and code
- HTTP status mapping per category
"""

from __future__ import annotations

from typing import ClassVar

import pytest

from paddy_boundary.core.config import ConfigValidationError
from paddy_boundary.core.exceptions import (
    BoundaryError,
    BoundaryLockedError,
    BoundaryNotLockedError,
    BoundaryNotReadyError,
    ContractError,
    InvalidCoordinateError,
    LifecycleError,
    LocationError,
    PersistError,
    PointRejectedError,
    RejectionReason,
    SaveInProgressError,
    UnlockNotRequestedError,
    ValidationError,
    ViewModeError,
)
from paddy_boundary.core.ingress import http_status_for
from paddy_boundary.providers.base import (
    BoundaryStoreError,
    LocationRequestError,
    LocationUnavailableError,
)


class TestBoundaryErrorBase:
    """BoundaryError base class behavior."""

    def test_default_attributes(self) -> None:
        err = BoundaryError("boom")
        assert err.message == "boom"
        assert err.stage == ""
        assert err.code == ""
        assert err.retryable is False
        assert err.correlation_id == ""

    def test_str_is_message(self) -> None:
        assert str(BoundaryError("human-readable error")) == "human-readable error"

    def test_to_error_dict_keys(self) -> None:
        err = BoundaryError("x", stage="s", code="C", retryable=True, correlation_id="id")
        d = err.to_error_dict()
        assert set(d.keys()) == {
            "category",
            "code",
            "stage",
            "message",
            "retryable",
            "correlation_id",
        }
        assert d["category"] == "transient"
        assert d["correlation_id"] == "id"

    def test_dynamic_category_from_retryable(self) -> None:
        assert BoundaryError("x", retryable=True).category == "transient"
        assert BoundaryError("x", retryable=False).category == "permanent"


class TestCategoryBases:
    """Category base classes set correct defaults."""

    @pytest.mark.parametrize(
        ("cls", "category", "retryable", "stage"),
        [
            (ValidationError, "validation", False, "validator"),
            (LifecycleError, "lifecycle", True, "lifecycle"),
            (PersistError, "persist", True, "persistence"),
            (LocationError, "location", True, "geolocation"),
            (ContractError, "contract", False, "contract"),
        ],
    )
    def test_defaults(
        self, cls: type[BoundaryError], category: str, retryable: bool, stage: str
    ) -> None:
        err = cls("x")
        assert err.category == category
        assert err.retryable is retryable
        assert err.stage == stage

    def test_retryable_override(self) -> None:
        assert PersistError("corrupt", retryable=False).retryable is False


class TestConcreteErrors:
    @pytest.mark.parametrize(
        ("reason", "code"),
        [
            (RejectionReason.MAX_POINTS, "MAX_POINTS_REACHED"),
            (RejectionReason.TOO_CLOSE, "POINT_TOO_CLOSE"),
            (RejectionReason.SELF_INTERSECTION, "SELF_INTERSECTION"),
            (RejectionReason.NOT_LAST_POINT, "NOT_LAST_POINT"),
            (RejectionReason.NOTHING_TO_UNDO, "NOTHING_TO_UNDO"),
            (RejectionReason.INVALID_COORDINATE, "COORDINATE_INVALID"),
        ],
    )
    def test_point_rejected_codes(self, reason: RejectionReason, code: str) -> None:
        err = PointRejectedError(reason, "nope")
        assert err.reason is reason
        assert err.code == code
        assert err.category == "validation"
        assert err.retryable is False

    @pytest.mark.parametrize(
        ("cls", "code"),
        [
            (BoundaryLockedError, "BOUNDARY_LOCKED"),
            (SaveInProgressError, "SAVE_IN_PROGRESS"),
            (BoundaryNotReadyError, "BOUNDARY_NOT_READY"),
            (UnlockNotRequestedError, "UNLOCK_NOT_REQUESTED"),
            (BoundaryNotLockedError, "BOUNDARY_NOT_LOCKED"),
            (ViewModeError, "VIEW_MODE"),
        ],
    )
    def test_lifecycle_codes(self, cls: type[LifecycleError], code: str) -> None:
        err = cls("x")
        assert err.code == code
        assert err.stage == "lifecycle"
        assert err.category == "lifecycle"

    def test_store_error(self) -> None:
        err = BoundaryStoreError("blob", "403")
        assert str(err) == "[blob] 403"
        assert err.store == "blob"
        assert err.stage == "boundary_store"
        assert err.category == "persist"
        assert err.retryable is True

    def test_location_errors(self) -> None:
        assert LocationUnavailableError("x").code == "LOCATION_UNAVAILABLE"
        assert LocationRequestError("x").code == "LOCATION_REQUEST_FAILED"


class TestAllExceptionsAreBoundaryError:
    """Every custom exception inherits from BoundaryError."""

    EXCEPTION_CLASSES: ClassVar[list[type[BoundaryError]]] = [
        PointRejectedError,
        InvalidCoordinateError,
        BoundaryLockedError,
        SaveInProgressError,
        BoundaryNotReadyError,
        UnlockNotRequestedError,
        BoundaryNotLockedError,
        BoundaryStoreError,
        LocationUnavailableError,
        LocationRequestError,
        ConfigValidationError,
    ]

    def test_all_subclass_boundary_error(self) -> None:
        for cls in self.EXCEPTION_CLASSES:
            assert issubclass(cls, BoundaryError), f"{cls.__name__} is not a BoundaryError"


class TestHttpStatus:
    @pytest.mark.parametrize(
        ("err", "status"),
        [
            (ContractError("x"), 400),
            (PointRejectedError(RejectionReason.TOO_CLOSE, "x"), 422),
            (InvalidCoordinateError("x"), 422),
            (BoundaryLockedError("x"), 409),
            (BoundaryStoreError("blob", "x"), 503),
            (ConfigValidationError("K", 1, "bad"), 500),
        ],
    )
    def test_mapping(self, err: BoundaryError, status: int) -> None:
        assert http_status_for(err) == status
