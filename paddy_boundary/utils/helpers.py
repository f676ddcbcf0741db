"""Shared helper functions used across the editor and the adapters."""

from __future__ import annotations

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC ``datetime``."""
    return datetime.now(UTC)


def parse_timestamp(timestamp: str) -> datetime:
    """Parse an ISO 8601 timestamp string, defaulting to current UTC time.

    Naive timestamps are taken to be UTC.

    Returns:
        A timezone-aware ``datetime``. Falls back to ``utc_now()``
        if the input is empty or unparseable.
    """
    if not timestamp:
        return utc_now()
    try:
        parsed = datetime.fromisoformat(timestamp)
    except (ValueError, TypeError):
        return utc_now()
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


