"""Azure Functions entry point for the paddy boundary service.

Registers the HTTP functions using the Python v2 programming model.

All business logic lives in the paddy_boundary package. This file is purely
the wiring layer between Azure Functions bindings and application code.
"""

from __future__ import annotations

import json
import logging

import azure.functions as func

from paddy_boundary.core.config import BoundaryConfig
from paddy_boundary.core.exceptions import BoundaryError, PersistError
from paddy_boundary.core.ingress import deserialize_request_body, http_status_for
from paddy_boundary.providers.base import BoundaryStore
from paddy_boundary.providers.factory import get_store

app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)

logger = logging.getLogger("paddy_boundary.function_app")

_store: BoundaryStore | None = None


def _get_store(config: BoundaryConfig) -> BoundaryStore:
    """Return the process-wide store, creating it on first use."""
    global _store  # noqa: PLW0603
    if _store is None:
        _store = get_store(config.boundary_store, config)
    return _store


def _json_response(body: object, status_code: int) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(body),
        status_code=status_code,
        mimetype="application/json",
    )


def _error_response(exc: BoundaryError) -> func.HttpResponse:
    return _json_response({"error": exc.to_error_dict()}, http_status_for(exc))


# ---------------------------------------------------------------------------
# HTTP: Submit Boundary
# ---------------------------------------------------------------------------


@app.function_name("submit_boundary")
@app.route(route="boundaries/{boundary_id}", methods=["POST"])
async def submit_boundary_http(req: func.HttpRequest) -> func.HttpResponse:
    """Validate a complete vertex list and save it as a locked boundary.

    Every vertex is replayed through the editor rules, so a boundary the
    field screen would have refused is refused here too (422).
    """
    from paddy_boundary.activities.submit_boundary import submit_boundary

    boundary_id = req.route_params.get("boundary_id", "")
    if not boundary_id:
        return func.HttpResponse("Missing boundary_id", status_code=400)

    try:
        config = BoundaryConfig.from_env()
        payload = deserialize_request_body(req.get_body())
        vertices = payload.get("vertices")
        logger.info(
            "submit_boundary started | boundary=%s | points=%s | correlation_id=%s",
            boundary_id,
            len(vertices) if isinstance(vertices, list) else "-",
            payload.get("correlation_id", ""),
        )
        result = await submit_boundary(
            payload,
            boundary_id=boundary_id,
            store=_get_store(config),
            config=config,
        )
    except BoundaryError as exc:
        if isinstance(exc, PersistError):
            logger.exception(
                "submit_boundary failed | boundary=%s | code=%s", boundary_id, exc.code
            )
        else:
            logger.warning(
                "submit_boundary refused | boundary=%s | code=%s | error=%s",
                boundary_id,
                exc.code,
                exc.message,
            )
        return _error_response(exc)

    logger.info(
        "submit_boundary completed | boundary=%s | area=%s",
        boundary_id,
        result["area_display"],
    )
    return _json_response(result, 201)


# ---------------------------------------------------------------------------
# HTTP: Load Boundary
# ---------------------------------------------------------------------------


@app.function_name("get_boundary")
@app.route(route="boundaries/{boundary_id}", methods=["GET"])
async def get_boundary_http(req: func.HttpRequest) -> func.HttpResponse:
    """Return the latest saved snapshot for a boundary."""
    from paddy_boundary.activities.load_boundary import load_boundary

    boundary_id = req.route_params.get("boundary_id", "")
    if not boundary_id:
        return func.HttpResponse("Missing boundary_id", status_code=400)

    try:
        config = BoundaryConfig.from_env()
        record = await load_boundary(boundary_id, store=_get_store(config))
    except BoundaryError as exc:
        logger.exception("get_boundary failed | boundary=%s | code=%s", boundary_id, exc.code)
        return _error_response(exc)

    if record is None:
        return func.HttpResponse("Boundary not found", status_code=404)
    return _json_response(record.to_dict(), 200)


# ---------------------------------------------------------------------------
# HTTP: Map Centre
# ---------------------------------------------------------------------------


@app.function_name("map_center")
@app.route(route="map-center", methods=["GET"])
async def map_center_http(req: func.HttpRequest) -> func.HttpResponse:
    """Return where the map should open: device position or the fallback."""
    from paddy_boundary.providers.geolocation import (
        get_geolocation_provider,
        resolve_map_center,
    )

    try:
        config = BoundaryConfig.from_env()
    except BoundaryError as exc:
        logger.exception("map_center failed | code=%s", exc.code)
        return _error_response(exc)

    center = await resolve_map_center(get_geolocation_provider(config), config=config)
    return _json_response(center.to_dict(), 200)
