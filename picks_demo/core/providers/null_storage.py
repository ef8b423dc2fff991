"""null_storage.py: Storage for environments without a durable tier.

Every read misses and every write is dropped, leaving the demo store with
its in-process cache only.

Called by: DemoStore (via registry) when DEMO_STORAGE_PROVIDER=none
"""

from __future__ import annotations

from picks_demo.config import Settings
from picks_demo.core.registry import register_storage


class NullStorage:
    """No-op storage."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings

    async def get(self, key: str) -> str | None:
        return None

    async def set(self, key: str, value: str) -> None:
        return None

    async def delete(self, key: str) -> None:
        return None


register_storage("none", NullStorage)
