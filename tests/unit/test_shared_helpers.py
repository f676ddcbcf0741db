"""Tests for shared helper functions."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

from paddy_boundary.utils.helpers import parse_timestamp, utc_now


class TestParseTimestamp:
    def test_aware_timestamp(self) -> None:
        parsed = parse_timestamp("2026-10-18T06:30:00+08:00")
        assert parsed == datetime(2026, 10, 18, 6, 30, tzinfo=timezone(timedelta(hours=8)))

    def test_naive_taken_as_utc(self) -> None:
        assert parse_timestamp("2026-10-18T06:30:00") == datetime(2026, 10, 18, 6, 30, tzinfo=UTC)

    def test_zulu_suffix(self) -> None:
        assert parse_timestamp("2026-10-18T06:30:00Z") == datetime(2026, 10, 18, 6, 30, tzinfo=UTC)

    def test_empty_defaults_to_now(self) -> None:
        before = datetime.now(UTC)
        parsed = parse_timestamp("")
        assert parsed >= before
        assert parsed.tzinfo is not None

    def test_garbage_defaults_to_now(self) -> None:
        before = datetime.now(UTC)
        assert parse_timestamp("yesterday-ish") >= before


class TestUtcNow:
    def test_is_aware(self) -> None:
        assert utc_now().tzinfo is UTC
