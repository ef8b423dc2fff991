"""Storage protocol: the durable key-value capability behind the demo store.

The demo store never talks to Redis (or anything else) directly. It imports
this protocol and receives a concrete implementation from the registry.
Swap backends by changing one env var (DEMO_STORAGE_PROVIDER).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class StorageUnavailableError(RuntimeError):
    """Raised by a storage provider when its backend cannot serve a call.

    Providers translate their backend's own errors (e.g. ``RedisError``)
    into this type so callers only need to handle one exception.
    """


@runtime_checkable
class KeyValueStorage(Protocol):
    """Abstract interface for a string key-value store.

    Implementations: in-memory dict, Redis, no-op.
    """

    async def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, overwriting any previous value."""
        ...

    async def delete(self, key: str) -> None:
        """Remove ``key``. Removing an absent key is not an error."""
        ...
