"""Shared boundary-mapping constants — single source of truth.

Geometry thresholds, precision rules, and storage names used by the
validator, the editing state machine, and the persistence adapters.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Polygon capacity
# ---------------------------------------------------------------------------

MIN_POINTS: int = 3
"""Vertices needed before a boundary is a closed, area-computable ring."""

MAX_POINTS: int = 10
"""Hard cap on the number of vertices in one boundary."""

# ---------------------------------------------------------------------------
# Spacing and snapping (metres)
# ---------------------------------------------------------------------------

MIN_DISTANCE_M: float = 0.5
"""Minimum great-circle distance between two distinct vertices."""

SNAP_TOLERANCE_M: float = 0.3
"""Radius within which a new point is merged into an existing vertex.

Smaller than ``MIN_DISTANCE_M``, so the spacing rule rejects any point
that could snap before the snap is attempted.
"""

EARTH_RADIUS_M: float = 6_371_000.0
"""Mean Earth radius for the spherical distance and area formulas."""

SQ_METRES_PER_HECTARE: float = 10_000.0

# ---------------------------------------------------------------------------
# Coordinate bounds and precision
# ---------------------------------------------------------------------------

MIN_LATITUDE: float = -90.0
MAX_LATITUDE: float = 90.0
MIN_LONGITUDE: float = -180.0
MAX_LONGITUDE: float = 180.0

COORDINATE_PRECISION: int = 8
"""Decimal places kept for persisted coordinates (~1 mm)."""

DISPLAY_PRECISION: int = 6
"""Decimal places shown to the operator."""

AREA_DISPLAY_PRECISION: int = 4
"""Decimal places for the hectare figure."""

# ---------------------------------------------------------------------------
# Geolocation
# ---------------------------------------------------------------------------

FALLBACK_LATITUDE: float = 14.5995
FALLBACK_LONGITUDE: float = 120.9842
"""Map centre used when the device location is unavailable (Manila)."""

DEFAULT_GEOLOCATION_TIMEOUT_MS: int = 10_000

# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------

DEFAULT_BOUNDARY_CONTAINER: str = "boundaries"
"""Blob container holding persisted boundary snapshots."""

DEFAULT_BOUNDARY_STORE: str = "memory"
