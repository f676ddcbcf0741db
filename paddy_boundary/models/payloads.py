"""Typed payload schemas for the HTTP boundary endpoints.

Request bodies arrive as JSON dicts. These ``TypedDict`` definitions make
the contracts explicit and ``validate_payload`` checks them at runtime.

Usage::

    from paddy_boundary.models.payloads import SubmitBoundaryInput, validate_payload

    validate_payload(body, SubmitBoundaryInput, activity="submit_boundary")
"""

from __future__ import annotations

from typing import Any, NotRequired, TypedDict

from paddy_boundary.core.exceptions import ContractError


class VertexDict(TypedDict):
    lat: float
    lng: float


class SubmitBoundaryInput(TypedDict):
    """HTTP body → ``submit_boundary`` activity."""

    vertices: list[VertexDict]
    correlation_id: NotRequired[str]
    saved_at: NotRequired[str]


class SubmitBoundaryOutput(TypedDict):
    """``submit_boundary`` activity → HTTP response."""

    boundary: dict[str, Any]
    area_hectares: float
    area_display: str


_REQUIRED_KEYS: dict[type, frozenset[str]] = {
    SubmitBoundaryInput: frozenset({"vertices"}),
}


def validate_payload(
    raw: dict[str, Any],
    schema: type,
    *,
    activity: str,
) -> None:
    """Validate that *raw* contains the required keys for *schema*.

    Raises:
        ContractError: If required keys are missing from the payload.
    """
    required = _REQUIRED_KEYS.get(schema)
    if required is None:
        return

    missing = required - raw.keys()
    if missing:
        msg = f"{activity}: missing required payload key(s): {', '.join(sorted(missing))}"
        raise ContractError(msg, stage=activity, code="PAYLOAD_MISSING_KEYS")
