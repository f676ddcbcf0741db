"""Deterministic blob paths for boundary snapshots.

Layout inside the boundary container::

    current/{boundary-id}.json
    history/{YYYY}/{MM}/{boundary-id}/{YYYYMMDDTHHMMSSZ}.json

``current/`` always holds the latest locked snapshot; every save also
writes an immutable copy under ``history/``. Path components are
sanitised to lowercase slug form: only ``a-z``, ``0-9``, and ``-``.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime

CURRENT_PREFIX = "current"
HISTORY_PREFIX = "history"

# Regex for sanitising path segments (allow only lowercase alphanumeric + hyphen)
_SLUG_RE = re.compile(r"[^a-z0-9-]+")


def sanitise_slug(value: str) -> str:
    """Convert a string to a URL/path-safe slug.

    - Lowercase
    - Spaces and underscores → hyphens
    - Strips all characters except ``a-z``, ``0-9``, ``-``
    - Collapses consecutive hyphens
    - Falls back to ``"unknown"`` if the result is empty
    """
    slug = value.lower().strip().replace(" ", "-").replace("_", "-")
    slug = _SLUG_RE.sub("", slug)
    slug = re.sub(r"-{2,}", "-", slug).strip("-")
    return slug if slug else "unknown"


def build_current_path(boundary_id: str) -> str:
    """Blob path of the latest snapshot: ``current/{boundary-id}.json``."""
    return f"{CURRENT_PREFIX}/{sanitise_slug(boundary_id)}.json"


def build_history_path(
    boundary_id: str,
    *,
    timestamp: datetime | None = None,
) -> str:
    """Blob path of an archived snapshot.

    Format: ``history/{YYYY}/{MM}/{boundary-id}/{YYYYMMDDTHHMMSSZ}.json``

    Args:
        boundary_id: Owner identifier (will be sanitised).
        timestamp: Save timestamp. Defaults to current UTC time.
    """
    ts = (timestamp or datetime.now(UTC)).astimezone(UTC)
    year = f"{ts.year:04d}"
    month = f"{ts.month:02d}"
    stamp = ts.strftime("%Y%m%dT%H%M%SZ")
    return f"{HISTORY_PREFIX}/{year}/{month}/{sanitise_slug(boundary_id)}/{stamp}.json"
