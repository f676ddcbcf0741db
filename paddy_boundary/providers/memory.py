"""In-process boundary store.

Holds snapshots in a dict keyed by boundary id. Used for local
development and tests; nothing survives the process.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from paddy_boundary.providers.base import BoundaryStore

if TYPE_CHECKING:
    from paddy_boundary.models.boundary import BoundaryRecord

logger = logging.getLogger("paddy_boundary.providers.memory")


class InMemoryBoundaryStore(BoundaryStore):
    """Dict-backed ``BoundaryStore``.

    Every save is also appended to ``history`` so callers can inspect
    what was written and in which order.
    """

    name = "memory"

    def __init__(self) -> None:
        self._records: dict[str, BoundaryRecord] = {}
        self.history: list[BoundaryRecord] = []

    async def save(self, record: BoundaryRecord) -> None:
        self._records[record.boundary_id] = record
        self.history.append(record)
        logger.debug(
            "Boundary stored in memory | boundary=%s | points=%d",
            record.boundary_id,
            record.point_count,
        )

    async def load(self, boundary_id: str) -> BoundaryRecord | None:
        return self._records.get(boundary_id)
