"""Load-boundary activity.

Fetches the latest saved snapshot for a boundary and opens an editor
seeded from it: Locked when a boundary exists, empty Draft otherwise.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from paddy_boundary.core.exceptions import ContractError
from paddy_boundary.editing.lifecycle import BoundaryLifecycleManager

if TYPE_CHECKING:
    from paddy_boundary.core.config import BoundaryConfig
    from paddy_boundary.models.boundary import BoundaryRecord
    from paddy_boundary.providers.base import BoundaryStore

logger = logging.getLogger("paddy_boundary.activities.load_boundary")


async def load_boundary(boundary_id: str, *, store: BoundaryStore) -> BoundaryRecord | None:
    """Return the latest snapshot for *boundary_id*, or ``None``.

    Raises:
        ContractError: If *boundary_id* is empty.
        PersistError: If the store could not be read.
    """
    if not boundary_id.strip():
        msg = "load_boundary: boundary_id must be non-empty"
        raise ContractError(msg, stage="load_boundary", code="MISSING_BOUNDARY_ID")

    record = await store.load(boundary_id)
    logger.info(
        "Boundary loaded | boundary=%s | found=%s",
        boundary_id,
        record is not None,
    )
    return record


async def open_boundary_editor(
    boundary_id: str,
    *,
    store: BoundaryStore,
    config: BoundaryConfig | None = None,
) -> BoundaryLifecycleManager:
    """Open an editor for *boundary_id*, seeded from its saved snapshot if any."""
    record = await load_boundary(boundary_id, store=store)
    if record is None:
        return BoundaryLifecycleManager(store, boundary_id=boundary_id, config=config)
    return BoundaryLifecycleManager.from_record(store, record, config=config)
