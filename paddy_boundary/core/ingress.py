"""Thin ingress boundary helpers for the Azure Functions entrypoints.

Keeps transport concerns out of ``function_app.py``:

- **deserialize_request_body** — normalises the JSON-string-bytes-or-dict
  body of an HTTP request into a plain dict.
- **http_status_for** — maps an error category to an HTTP status code.
- **get_blob_service_client** — creates an ``azure.storage.blob`` client
  from the ``AzureWebJobsStorage`` environment variable, failing fast
  with a structured error if unconfigured.
"""

from __future__ import annotations

import json
import logging
import os
from typing import TYPE_CHECKING, Any

from paddy_boundary.core.exceptions import BoundaryError, ContractError

if TYPE_CHECKING:
    from azure.storage.blob import BlobServiceClient

logger = logging.getLogger("paddy_boundary.core.ingress")


def deserialize_request_body(raw: str | bytes | dict[str, Any] | object) -> dict[str, Any]:
    """Normalise an HTTP request body to a plain dict.

    Args:
        raw: The request body as text, UTF-8 bytes, or an already-parsed dict.

    Returns:
        Parsed dict payload.

    Raises:
        ContractError: If *raw* is not a JSON object.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"Request body is not UTF-8: {exc}"
            raise ContractError(msg, stage="ingress", code="INVALID_ENCODING") from exc
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except (json.JSONDecodeError, ValueError) as exc:
            msg = f"Request body is not valid JSON: {exc}"
            raise ContractError(msg, stage="ingress", code="INVALID_JSON") from exc
        if not isinstance(parsed, dict):
            msg = f"Request body JSON must be an object, got {type(parsed).__name__}"
            raise ContractError(msg, stage="ingress", code="INVALID_INPUT_TYPE")
        return parsed
    if isinstance(raw, dict):
        return raw
    msg = f"Unexpected request body type: {type(raw).__name__}"
    raise ContractError(msg, stage="ingress", code="INVALID_INPUT_TYPE")


def get_blob_service_client() -> BlobServiceClient:
    """Create a ``BlobServiceClient`` from the ``AzureWebJobsStorage`` env var.

    Raises:
        ContractError: If the environment variable is not set.
    """
    from azure.storage.blob import BlobServiceClient

    connection_string = os.environ.get("AzureWebJobsStorage", "")  # noqa: SIM112
    if not connection_string:
        msg = "AzureWebJobsStorage environment variable is not set"
        raise ContractError(msg, stage="ingress", code="MISSING_CONNECTION_STRING")

    logger.debug("Creating BlobServiceClient from AzureWebJobsStorage")
    return BlobServiceClient.from_connection_string(connection_string)


def http_status_for(exc: BoundaryError) -> int:
    """Map an error category to the HTTP status returned to the caller.

    contract → 400, validation → 422, lifecycle → 409, persistence → 503;
    anything else is a 500.
    """
    return _CATEGORY_STATUS.get(exc.category, 500)


_CATEGORY_STATUS: dict[str, int] = {
    "contract": 400,
    "validation": 422,
    "lifecycle": 409,
    "persist": 503,
}
