"""memory_storage.py: In-process key-value storage.

Implements the KeyValueStorage protocol with a plain dict. Values live in
RAM and are lost on restart, which is fine for single-process demos and
for tests.

Called by: DemoStore (via registry) when DEMO_STORAGE_PROVIDER=memory
Depends on: protocols.py (KeyValueStorage)
"""

from __future__ import annotations

import logging

from picks_demo.config import Settings
from picks_demo.core.registry import register_storage

logger = logging.getLogger(__name__)


class MemoryStorage:
    """Dict-backed storage.

    Usage:
        Set DEMO_STORAGE_PROVIDER=memory (the default) to activate.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize an empty store.

        Args:
            settings: App settings (not used, but required by registry interface).
        """
        self._settings = settings
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value
        logger.debug("MemoryStorage.set: key='%s' (%d chars)", key, len(value))

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)
        logger.debug("MemoryStorage.delete: key='%s'", key)

    def keys(self) -> list[str]:
        """Return the stored keys (debug/test helper)."""
        return sorted(self._data)


# ─── Provider Registration ────────────────────────────────────────────────────

register_storage("memory", MemoryStorage)
