"""Azure Blob Storage boundary store.

Each save writes the snapshot JSON twice: to ``current/{id}.json``
(overwritten, read back by ``load``) and to a timestamped path under
``history/`` (never overwritten). See ``paddy_boundary.utils.blob_paths``.

The Azure SDK client is synchronous; calls run in a worker thread so
the editor's event loop is never blocked while a save is in flight.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from paddy_boundary.core.exceptions import ContractError
from paddy_boundary.models.boundary import BoundaryRecord
from paddy_boundary.providers.base import BoundaryStore, BoundaryStoreError
from paddy_boundary.utils.blob_paths import build_current_path, build_history_path
from paddy_boundary.utils.helpers import parse_timestamp

if TYPE_CHECKING:
    from azure.storage.blob import BlobServiceClient

    from paddy_boundary.core.config import BoundaryConfig

logger = logging.getLogger("paddy_boundary.providers.blob_store")

_JSON_CONTENT_TYPE = "application/json"


class BlobBoundaryStore(BoundaryStore):
    """``BoundaryStore`` backed by one Azure Blob Storage container.

    Args:
        blob_service_client: An Azure ``BlobServiceClient``.
        container: Container holding the snapshots.
    """

    name = "blob"

    def __init__(self, blob_service_client: BlobServiceClient, container: str) -> None:
        self._client = blob_service_client
        self._container = container

    @classmethod
    def from_config(cls, config: BoundaryConfig) -> BlobBoundaryStore:
        """Build the store from ``AzureWebJobsStorage`` and the configured container."""
        from paddy_boundary.core.ingress import get_blob_service_client

        return cls(get_blob_service_client(), config.boundary_container)

    @property
    def container(self) -> str:
        return self._container

    async def save(self, record: BoundaryRecord) -> None:
        await asyncio.to_thread(self._upload, record)

    async def load(self, boundary_id: str) -> BoundaryRecord | None:
        return await asyncio.to_thread(self._download, boundary_id)

    # ------------------------------------------------------------------
    # Blocking SDK calls
    # ------------------------------------------------------------------

    def _upload(self, record: BoundaryRecord) -> None:
        from azure.storage.blob import ContentSettings

        payload = record.to_json().encode("utf-8")
        current_path = build_current_path(record.boundary_id)
        history_path = build_history_path(
            record.boundary_id, timestamp=parse_timestamp(record.saved_at)
        )
        settings = ContentSettings(content_type=_JSON_CONTENT_TYPE)

        try:
            for path in (history_path, current_path):
                blob_client = self._client.get_blob_client(container=self._container, blob=path)
                blob_client.upload_blob(payload, overwrite=True, content_settings=settings)
        except Exception as exc:
            msg = f"Failed to upload boundary to {self._container}/{current_path}: {exc}"
            raise BoundaryStoreError(self.name, msg) from exc

        logger.info(
            "Boundary uploaded | boundary=%s | container=%s | path=%s | history=%s | bytes=%d",
            record.boundary_id,
            self._container,
            current_path,
            history_path,
            len(payload),
        )

    def _download(self, boundary_id: str) -> BoundaryRecord | None:
        from azure.core.exceptions import ResourceNotFoundError

        path = build_current_path(boundary_id)
        blob_client = self._client.get_blob_client(container=self._container, blob=path)
        try:
            payload = blob_client.download_blob().readall()
        except ResourceNotFoundError:
            logger.info("No saved boundary | boundary=%s | path=%s", boundary_id, path)
            return None
        except Exception as exc:
            msg = f"Failed to download boundary from {self._container}/{path}: {exc}"
            raise BoundaryStoreError(self.name, msg) from exc

        try:
            return BoundaryRecord.from_json(payload)
        except ContractError as exc:
            msg = f"Stored boundary at {self._container}/{path} is corrupt: {exc.message}"
            raise BoundaryStoreError(self.name, msg, retryable=False) from exc
