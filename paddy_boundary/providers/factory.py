"""Store factory — selects the active boundary store by name.

The factory maintains a registry of known adapters. New adapters are
registered with ``register_store`` or by adding an entry to
``_register_builtin_stores``.

Usage::

    from paddy_boundary.providers.factory import get_store

    store = get_store(config.boundary_store, config)
    await store.save(record)

The store name is read from the ``BOUNDARY_STORE`` environment variable
via ``BoundaryConfig.boundary_store``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from paddy_boundary.core.config import BoundaryConfig
from paddy_boundary.providers.base import BoundaryStore, BoundaryStoreError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

MEMORY = "memory"
BLOB = "blob"

# Each entry maps a store name to a callable that returns the adapter
# *class*. The blob adapter is imported lazily so the Azure SDK is only
# loaded when that store is selected.

_STORE_REGISTRY: dict[str, Callable[[], type[BoundaryStore]]] = {}


def _register_builtin_stores() -> None:
    def _memory() -> type[BoundaryStore]:
        from paddy_boundary.providers.memory import InMemoryBoundaryStore

        return InMemoryBoundaryStore

    def _blob() -> type[BoundaryStore]:
        from paddy_boundary.providers.blob_store import BlobBoundaryStore

        return BlobBoundaryStore

    _STORE_REGISTRY[MEMORY] = _memory
    _STORE_REGISTRY[BLOB] = _blob


def _ensure_registry() -> None:
    """Initialise the store registry once (idempotent)."""
    if not _STORE_REGISTRY:
        _register_builtin_stores()


def register_store(
    name: str,
    loader: Callable[[], type[BoundaryStore]],
) -> None:
    """Register a custom store adapter.

    Args:
        name: Store name (e.g. ``"firestore"``).
        loader: A zero-argument callable that returns the adapter class.

    Raises:
        ValueError: If the name is empty.
    """
    if not name:
        msg = "Store name must be non-empty"
        raise ValueError(msg)
    _ensure_registry()
    _STORE_REGISTRY[name] = loader
    logger.debug("Registered boundary store: %s", name)


def get_store(name: str, config: BoundaryConfig | None = None) -> BoundaryStore:
    """Create and return a boundary store instance.

    Args:
        name: Store identifier (e.g. ``"memory"``, ``"blob"``).
        config: Configuration passed to the adapter's ``from_config``.
            Defaults to ``BoundaryConfig()``.

    Raises:
        BoundaryStoreError: If the named store is not registered.
    """
    _ensure_registry()

    loader = _STORE_REGISTRY.get(name)
    if loader is None:
        available = ", ".join(sorted(_STORE_REGISTRY))
        msg = f"Unknown boundary store: {name!r}. Available: {available}"
        raise BoundaryStoreError(name, msg, retryable=False)

    store_cls = loader()
    logger.info("Creating boundary store: %s", name)
    return store_cls.from_config(config or BoundaryConfig())


def list_stores() -> list[str]:
    """Return the names of all registered store adapters."""
    _ensure_registry()
    return sorted(_STORE_REGISTRY)
