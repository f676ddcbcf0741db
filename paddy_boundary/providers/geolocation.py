"""Device location sources and map-centre resolution.

``resolve_map_center`` is what the editor screen calls when it opens:
ask the location source once, with a timeout, and fall back to a fixed
coordinate on any failure so the map never waits indefinitely.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import httpx

from paddy_boundary.core.config import BoundaryConfig
from paddy_boundary.core.exceptions import InvalidCoordinateError, LocationError
from paddy_boundary.models.vertex import Vertex, make_vertex
from paddy_boundary.providers.base import (
    GeolocationProvider,
    LocationRequestError,
    LocationUnavailableError,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger("paddy_boundary.providers.geolocation")


class StaticGeolocationProvider(GeolocationProvider):
    """Returns a fixed position, or reports that none is available.

    Args:
        position: The position to report. ``None`` behaves like a device
            without location support.
    """

    def __init__(self, position: Vertex | None = None) -> None:
        self._position = position

    async def current_position(self, *, timeout_ms: int, high_accuracy: bool) -> Vertex:
        if self._position is None:
            msg = "Geolocation is not supported on this device"
            raise LocationUnavailableError(msg)
        return self._position


class HttpGeolocationProvider(GeolocationProvider):
    """Fetches the device's last fix from an HTTP endpoint.

    The endpoint must answer ``GET`` with a JSON object holding either
    ``lat``/``lng`` or ``latitude``/``longitude``.

    Args:
        url: Endpoint URL.
        client: Optional shared ``httpx.AsyncClient``; a short-lived
            client is created per request when omitted.
    """

    def __init__(self, url: str, *, client: httpx.AsyncClient | None = None) -> None:
        if not url:
            msg = "Geolocation URL must be non-empty"
            raise ValueError(msg)
        self._url = url
        self._client = client

    async def current_position(self, *, timeout_ms: int, high_accuracy: bool) -> Vertex:
        params = {"highAccuracy": "true" if high_accuracy else "false"}
        timeout = httpx.Timeout(timeout_ms / 1000)
        try:
            if self._client is not None:
                response = await self._client.get(self._url, params=params, timeout=timeout)
            else:
                async with httpx.AsyncClient(timeout=timeout) as client:
                    response = await client.get(self._url, params=params)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as exc:
            msg = f"Location request to {self._url} failed: {exc}"
            raise LocationRequestError(msg) from exc
        except ValueError as exc:
            msg = f"Location response from {self._url} is not JSON"
            raise LocationRequestError(msg) from exc

        return _parse_position(body, self._url)


def _parse_position(body: Any, url: str) -> Vertex:
    if not isinstance(body, dict):
        msg = f"Location response from {url} must be an object, got {type(body).__name__}"
        raise LocationRequestError(msg)

    lat = _first_number(body, ("lat", "latitude"))
    lng = _first_number(body, ("lng", "lon", "longitude"))
    if lat is None or lng is None:
        msg = f"Location response from {url} has no usable coordinates"
        raise LocationUnavailableError(msg)
    try:
        return make_vertex(lat, lng)
    except InvalidCoordinateError as exc:
        msg = f"Location response from {url} is out of range: {exc.message}"
        raise LocationRequestError(msg) from exc


def _first_number(body: Mapping[str, Any], keys: tuple[str, ...]) -> float | None:
    for key in keys:
        value = body.get(key)
        if isinstance(value, int | float) and not isinstance(value, bool):
            return float(value)
    return None


def get_geolocation_provider(config: BoundaryConfig) -> GeolocationProvider | None:
    """Return the HTTP provider when ``GEOLOCATION_URL`` is set, else ``None``."""
    if not config.geolocation_url:
        return None
    return HttpGeolocationProvider(config.geolocation_url)


async def resolve_map_center(
    provider: GeolocationProvider | None,
    *,
    fallback: Vertex | None = None,
    config: BoundaryConfig | None = None,
) -> Vertex:
    """Return the position to centre the map on.

    Asks *provider* once, bounded by the configured timeout. On any
    ``LocationError`` or timeout, returns *fallback* if given, else the
    configured fallback coordinate. Never raises for location failures.

    Args:
        provider: Location source, or ``None`` if the device has none.
        fallback: Caller-preferred centre (e.g. a saved boundary's centroid).
        config: Timeout, accuracy, and fallback settings.
    """
    config = config or BoundaryConfig()
    default = fallback or Vertex(config.fallback_lat, config.fallback_lng)

    if provider is None:
        logger.warning("Geolocation not available | using fallback=%s", default.display())
        return default

    timeout_s = config.geolocation_timeout_ms / 1000
    try:
        position = await asyncio.wait_for(
            provider.current_position(
                timeout_ms=config.geolocation_timeout_ms,
                high_accuracy=config.geolocation_high_accuracy,
            ),
            timeout=timeout_s,
        )
    except TimeoutError:
        logger.warning(
            "Geolocation timed out | timeout_ms=%d | using fallback=%s",
            config.geolocation_timeout_ms,
            default.display(),
        )
        return default
    except LocationError as exc:
        logger.warning(
            "Geolocation error | code=%s | error=%s | using fallback=%s",
            exc.code,
            exc.message,
            default.display(),
        )
        return default

    logger.info("Location obtained | position=%s", position.display())
    return position
