"""Storage registry: resolves the concrete storage backend from config.

The registry is the single place where storage implementations are wired.
The demo store calls ``get_storage(settings)`` and gets back a concrete
implementation based on ``DEMO_STORAGE_PROVIDER``.

Usage:
    from picks_demo.core.registry import get_storage

    storage = get_storage(settings)
    await storage.set("key", "value")
"""

from __future__ import annotations

import logging

from picks_demo.config import Settings
from picks_demo.core.protocols import KeyValueStorage

logger = logging.getLogger(__name__)

# ─── Provider Factory Map ──────────────────────────────────────────────────────
# Adding a new backend = one entry here + one module in providers/.

_STORAGE_FACTORIES: dict[str, type] = {}


def register_storage(name: str, cls: type) -> None:
    """Register a storage implementation.

    Called by provider modules on import, or manually in tests.

    Args:
        name: Provider name (e.g., 'memory', 'redis').
        cls: The provider class implementing ``KeyValueStorage``.
    """
    _STORAGE_FACTORIES[name] = cls
    logger.debug("Registered storage provider: %s", name)


def _ensure_providers_loaded() -> None:
    """Import all provider modules to trigger registration."""
    from picks_demo.core.providers import (  # noqa: F401
        memory_storage,
        null_storage,
        redis_storage,
    )


def available_storage_providers() -> list[str]:
    """Names of every registered storage provider."""
    _ensure_providers_loaded()
    return sorted(_STORAGE_FACTORIES)


def get_storage(settings: Settings, override: str | None = None) -> KeyValueStorage:
    """Build the configured storage provider.

    Args:
        settings: App settings passed to the provider constructor.
        override: Provider name to use instead of ``settings.demo_storage_provider``.

    Returns:
        A fresh provider instance.

    Raises:
        ValueError: If the provider name is not registered.
    """
    _ensure_providers_loaded()
    name = override or settings.demo_storage_provider

    cls = _STORAGE_FACTORIES.get(name)
    if cls is None:
        raise ValueError(
            f"Unknown storage provider: '{name}'. "
            f"Available: {sorted(_STORAGE_FACTORIES)}"
        )

    instance = cls(settings)
    logger.info("Initialized storage provider: %s", name)
    return instance
