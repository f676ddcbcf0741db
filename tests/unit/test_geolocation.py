"""Tests for location providers and map-centre resolution.

The HTTP provider is exercised against ``httpx.MockTransport``.
"""

from __future__ import annotations

import asyncio

import httpx
import pytest

from paddy_boundary.core.config import BoundaryConfig
from paddy_boundary.models.vertex import Vertex
from paddy_boundary.providers.base import (
    GeolocationProvider,
    LocationRequestError,
    LocationUnavailableError,
)
from paddy_boundary.providers.geolocation import (
    HttpGeolocationProvider,
    StaticGeolocationProvider,
    get_geolocation_provider,
    resolve_map_center,
)

URL = "https://device.example/position"

MANILA = Vertex(14.5995, 120.9842)


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class _SlowProvider(GeolocationProvider):
    async def current_position(self, *, timeout_ms: int, high_accuracy: bool) -> Vertex:
        await asyncio.sleep(5)
        return Vertex(0.0, 0.0)


class _RecordingProvider(GeolocationProvider):
    def __init__(self) -> None:
        self.calls: list[tuple[int, bool]] = []

    async def current_position(self, *, timeout_ms: int, high_accuracy: bool) -> Vertex:
        self.calls.append((timeout_ms, high_accuracy))
        return Vertex(10.3157, 123.8854)


# ---------------------------------------------------------------------------
# StaticGeolocationProvider
# ---------------------------------------------------------------------------


class TestStaticProvider:
    @pytest.mark.asyncio()
    async def test_returns_position(self) -> None:
        provider = StaticGeolocationProvider(Vertex(1.0, 2.0))
        assert await provider.current_position(timeout_ms=1, high_accuracy=True) == Vertex(1.0, 2.0)

    @pytest.mark.asyncio()
    async def test_unsupported(self) -> None:
        with pytest.raises(LocationUnavailableError, match="not supported"):
            await StaticGeolocationProvider().current_position(timeout_ms=1, high_accuracy=True)


# ---------------------------------------------------------------------------
# HttpGeolocationProvider
# ---------------------------------------------------------------------------


class TestHttpProvider:
    def test_empty_url_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            HttpGeolocationProvider("")

    @pytest.mark.asyncio()
    async def test_lat_lng_body(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"lat": 14.6, "lng": 121.0})

        async with _client(handler) as client:
            provider = HttpGeolocationProvider(URL, client=client)
            position = await provider.current_position(timeout_ms=500, high_accuracy=True)

        assert position == Vertex(14.6, 121.0)
        assert seen[0].method == "GET"
        assert seen[0].url.params["highAccuracy"] == "true"

    @pytest.mark.asyncio()
    async def test_latitude_longitude_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["highAccuracy"] == "false"
            return httpx.Response(200, json={"latitude": -7.25, "longitude": 112.75})

        async with _client(handler) as client:
            provider = HttpGeolocationProvider(URL, client=client)
            position = await provider.current_position(timeout_ms=500, high_accuracy=False)

        assert position == Vertex(-7.25, 112.75)

    @pytest.mark.asyncio()
    async def test_server_error(self) -> None:
        async with _client(lambda request: httpx.Response(503)) as client:
            provider = HttpGeolocationProvider(URL, client=client)
            with pytest.raises(LocationRequestError):
                await provider.current_position(timeout_ms=500, high_accuracy=True)

    @pytest.mark.asyncio()
    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as client:
            provider = HttpGeolocationProvider(URL, client=client)
            with pytest.raises(LocationRequestError, match="failed"):
                await provider.current_position(timeout_ms=500, high_accuracy=True)

    @pytest.mark.asyncio()
    async def test_not_json(self) -> None:
        async with _client(lambda request: httpx.Response(200, content=b"<html>")) as client:
            provider = HttpGeolocationProvider(URL, client=client)
            with pytest.raises(LocationRequestError, match="not JSON"):
                await provider.current_position(timeout_ms=500, high_accuracy=True)

    @pytest.mark.asyncio()
    async def test_no_coordinates(self) -> None:
        async with _client(lambda request: httpx.Response(200, json={"error": "denied"})) as client:
            provider = HttpGeolocationProvider(URL, client=client)
            with pytest.raises(LocationUnavailableError):
                await provider.current_position(timeout_ms=500, high_accuracy=True)

    @pytest.mark.asyncio()
    async def test_out_of_range(self) -> None:
        body = {"lat": 123.0, "lng": 0.0}
        async with _client(lambda request: httpx.Response(200, json=body)) as client:
            provider = HttpGeolocationProvider(URL, client=client)
            with pytest.raises(LocationRequestError, match="out of range"):
                await provider.current_position(timeout_ms=500, high_accuracy=True)

    @pytest.mark.asyncio()
    async def test_array_body(self) -> None:
        async with _client(lambda request: httpx.Response(200, json=[14.6, 121.0])) as client:
            provider = HttpGeolocationProvider(URL, client=client)
            with pytest.raises(LocationRequestError, match="must be an object"):
                await provider.current_position(timeout_ms=500, high_accuracy=True)


class TestGetGeolocationProvider:
    def test_none_without_url(self) -> None:
        assert get_geolocation_provider(BoundaryConfig()) is None

    def test_http_with_url(self) -> None:
        provider = get_geolocation_provider(BoundaryConfig(geolocation_url=URL))
        assert isinstance(provider, HttpGeolocationProvider)


# ---------------------------------------------------------------------------
# resolve_map_center
# ---------------------------------------------------------------------------


class TestResolveMapCenter:
    @pytest.mark.asyncio()
    async def test_no_provider_uses_config_fallback(self) -> None:
        assert await resolve_map_center(None) == MANILA

    @pytest.mark.asyncio()
    async def test_no_provider_prefers_caller_fallback(self) -> None:
        centre = Vertex(1.0, 2.0)
        assert await resolve_map_center(None, fallback=centre) is centre

    @pytest.mark.asyncio()
    async def test_position_returned(self) -> None:
        provider = StaticGeolocationProvider(Vertex(10.0, 120.0))
        assert await resolve_map_center(provider) == Vertex(10.0, 120.0)

    @pytest.mark.asyncio()
    async def test_passes_config_to_provider(self) -> None:
        provider = _RecordingProvider()
        config = BoundaryConfig(geolocation_timeout_ms=2500, geolocation_high_accuracy=False)
        await resolve_map_center(provider, config=config)
        assert provider.calls == [(2500, False)]

    @pytest.mark.asyncio()
    async def test_location_error_falls_back(self) -> None:
        assert await resolve_map_center(StaticGeolocationProvider()) == MANILA

    @pytest.mark.asyncio()
    async def test_configured_fallback(self) -> None:
        config = BoundaryConfig(fallback_lat=10.3157, fallback_lng=123.8854)
        centre = await resolve_map_center(StaticGeolocationProvider(), config=config)
        assert centre == Vertex(10.3157, 123.8854)

    @pytest.mark.asyncio()
    async def test_timeout_falls_back(self) -> None:
        config = BoundaryConfig(geolocation_timeout_ms=20)
        assert await resolve_map_center(_SlowProvider(), config=config) == MANILA

    @pytest.mark.asyncio()
    async def test_http_failure_falls_back(self) -> None:
        async with _client(lambda request: httpx.Response(500)) as client:
            provider = HttpGeolocationProvider(URL, client=client)
            centre = await resolve_map_center(provider, fallback=Vertex(5.0, 5.0))
        assert centre == Vertex(5.0, 5.0)
