"""Global pytest fixtures."""

from __future__ import annotations

import pytest

from picks_demo.config import Settings
from picks_demo.core.protocols import StorageUnavailableError
from picks_demo.core.providers.memory_storage import MemoryStorage
from picks_demo.demo.api import DemoApi
from picks_demo.demo.store import DemoStore


class FaultyStorage:
    """Storage fake whose backend can be switched off per operation.

    Wraps a MemoryStorage; while a flag is set, that operation raises
    ``StorageUnavailableError`` instead of touching the data.
    """

    def __init__(self) -> None:
        self.inner = MemoryStorage()
        self.fail_reads = False
        self.fail_writes = False
        self.fail_deletes = False
        self.calls: list[tuple[str, str]] = []

    async def get(self, key: str) -> str | None:
        self.calls.append(("get", key))
        if self.fail_reads:
            raise StorageUnavailableError("reads disabled")
        return await self.inner.get(key)

    async def set(self, key: str, value: str) -> None:
        self.calls.append(("set", key))
        if self.fail_writes:
            raise StorageUnavailableError("writes disabled")
        await self.inner.set(key, value)

    async def delete(self, key: str) -> None:
        self.calls.append(("delete", key))
        if self.fail_deletes:
            raise StorageUnavailableError("deletes disabled")
        await self.inner.delete(key)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    """Demo-mode settings that ignore any local .env file."""
    return Settings(_env_file=None, demo_mode=True, demo_storage_provider="memory")


@pytest.fixture
def storage() -> FaultyStorage:
    return FaultyStorage()


@pytest.fixture
def store(storage: FaultyStorage, settings: Settings) -> DemoStore:
    return DemoStore(storage=storage, settings=settings)


@pytest.fixture
def demo_api(store: DemoStore) -> DemoApi:
    return DemoApi(store=store)

