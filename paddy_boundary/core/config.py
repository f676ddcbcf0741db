"""Boundary-mapping configuration loaded from environment variables.

All values default to the rules the field screen ships with. Azure
Functions app settings (or ``local.settings.json`` for local dev) are
the source of truth when deployed.

``from_env()`` raises ``ConfigValidationError`` if any value is out of
its valid range, so bad configuration is caught at startup rather than
on the first map click.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from paddy_boundary.core.constants import (
    COORDINATE_PRECISION,
    DEFAULT_BOUNDARY_CONTAINER,
    DEFAULT_BOUNDARY_STORE,
    DEFAULT_GEOLOCATION_TIMEOUT_MS,
    FALLBACK_LATITUDE,
    FALLBACK_LONGITUDE,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MAX_POINTS,
    MIN_DISTANCE_M,
    MIN_LATITUDE,
    MIN_LONGITUDE,
    MIN_POINTS,
    SNAP_TOLERANCE_M,
)
from paddy_boundary.core.exceptions import BoundaryError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})

# Largest decimal precision a double can carry meaningfully for degrees.
_MAX_PRECISION = 15


class ConfigValidationError(BoundaryError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class BoundaryConfig:
    """Immutable boundary-mapping configuration.

    Loaded once at startup and passed to the lifecycle manager, the
    geolocation resolver, and the store factory.

    Attributes:
        min_points: Vertices needed before a boundary can be saved.
        max_points: Maximum vertices in one boundary.
        min_distance_m: Minimum spacing between distinct vertices in metres.
        snap_tolerance_m: Snap radius in metres.
        coordinate_precision: Decimal places kept when persisting coordinates.
        fallback_lat: Latitude used when the device location is unavailable.
        fallback_lng: Longitude used when the device location is unavailable.
        geolocation_timeout_ms: Timeout for one device-location request.
        geolocation_high_accuracy: Whether to ask for a high-accuracy fix.
        geolocation_url: Endpoint of the HTTP geolocation provider (empty
            disables it).
        boundary_store: Registered store name (``memory`` or ``blob``).
        boundary_container: Blob container for boundary snapshots.
    """

    min_points: int = MIN_POINTS
    max_points: int = MAX_POINTS
    min_distance_m: float = MIN_DISTANCE_M
    snap_tolerance_m: float = SNAP_TOLERANCE_M
    coordinate_precision: int = COORDINATE_PRECISION
    fallback_lat: float = FALLBACK_LATITUDE
    fallback_lng: float = FALLBACK_LONGITUDE
    geolocation_timeout_ms: int = DEFAULT_GEOLOCATION_TIMEOUT_MS
    geolocation_high_accuracy: bool = True
    geolocation_url: str = ""
    boundary_store: str = DEFAULT_BOUNDARY_STORE
    boundary_container: str = DEFAULT_BOUNDARY_CONTAINER

    @classmethod
    def from_env(cls) -> BoundaryConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range, a required
                string is empty, or a boolean flag is unrecognised.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``BOUNDARY_MAX_POINTS=ten``).
        """
        config = cls(
            min_points=int(os.getenv("BOUNDARY_MIN_POINTS", str(MIN_POINTS))),
            max_points=int(os.getenv("BOUNDARY_MAX_POINTS", str(MAX_POINTS))),
            min_distance_m=float(os.getenv("BOUNDARY_MIN_DISTANCE_M", str(MIN_DISTANCE_M))),
            snap_tolerance_m=float(os.getenv("BOUNDARY_SNAP_TOLERANCE_M", str(SNAP_TOLERANCE_M))),
            coordinate_precision=int(
                os.getenv("BOUNDARY_COORDINATE_PRECISION", str(COORDINATE_PRECISION))
            ),
            fallback_lat=float(os.getenv("BOUNDARY_FALLBACK_LAT", str(FALLBACK_LATITUDE))),
            fallback_lng=float(os.getenv("BOUNDARY_FALLBACK_LNG", str(FALLBACK_LONGITUDE))),
            geolocation_timeout_ms=int(
                os.getenv("GEOLOCATION_TIMEOUT_MS", str(DEFAULT_GEOLOCATION_TIMEOUT_MS))
            ),
            geolocation_high_accuracy=_parse_bool(
                "GEOLOCATION_HIGH_ACCURACY", os.getenv("GEOLOCATION_HIGH_ACCURACY", "true")
            ),
            geolocation_url=os.getenv("GEOLOCATION_URL", ""),
            boundary_store=os.getenv("BOUNDARY_STORE", DEFAULT_BOUNDARY_STORE),
            boundary_container=os.getenv("BOUNDARY_CONTAINER", DEFAULT_BOUNDARY_CONTAINER),
        )
        _validate(config)
        return config


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigValidationError(key, raw, "must be a boolean (true/false)")


def _validate(config: BoundaryConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.min_points < MIN_POINTS:
        raise ConfigValidationError(
            "BOUNDARY_MIN_POINTS",
            config.min_points,
            f"must be >= {MIN_POINTS} (a ring needs three vertices)",
        )

    if config.max_points < config.min_points:
        raise ConfigValidationError(
            "BOUNDARY_MAX_POINTS",
            config.max_points,
            f"must be >= BOUNDARY_MIN_POINTS ({config.min_points})",
        )

    if config.min_distance_m <= 0:
        raise ConfigValidationError(
            "BOUNDARY_MIN_DISTANCE_M",
            config.min_distance_m,
            "must be > 0 (metres)",
        )

    if config.snap_tolerance_m < 0:
        raise ConfigValidationError(
            "BOUNDARY_SNAP_TOLERANCE_M",
            config.snap_tolerance_m,
            "must be >= 0 (metres)",
        )

    if not 1 <= config.coordinate_precision <= _MAX_PRECISION:
        raise ConfigValidationError(
            "BOUNDARY_COORDINATE_PRECISION",
            config.coordinate_precision,
            f"must be between 1 and {_MAX_PRECISION} (decimal places)",
        )

    if not MIN_LATITUDE <= config.fallback_lat <= MAX_LATITUDE:
        raise ConfigValidationError(
            "BOUNDARY_FALLBACK_LAT",
            config.fallback_lat,
            f"must be between {MIN_LATITUDE} and {MAX_LATITUDE} (degrees)",
        )

    if not MIN_LONGITUDE <= config.fallback_lng <= MAX_LONGITUDE:
        raise ConfigValidationError(
            "BOUNDARY_FALLBACK_LNG",
            config.fallback_lng,
            f"must be between {MIN_LONGITUDE} and {MAX_LONGITUDE} (degrees)",
        )

    if config.geolocation_timeout_ms <= 0:
        raise ConfigValidationError(
            "GEOLOCATION_TIMEOUT_MS",
            config.geolocation_timeout_ms,
            "must be > 0 (milliseconds)",
        )

    if not config.boundary_store:
        raise ConfigValidationError(
            "BOUNDARY_STORE",
            config.boundary_store,
            "must not be empty",
        )

    if not config.boundary_container:
        raise ConfigValidationError(
            "BOUNDARY_CONTAINER",
            config.boundary_container,
            "must not be empty",
        )
