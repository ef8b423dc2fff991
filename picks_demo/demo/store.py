"""store.py: Scenario-keyed two-tier store for demo datasets.

Tier 1 is a process-local dict (scenario → DemoData). Tier 2 is the
configured KeyValueStorage, holding one JSON document per scenario plus
the id of the active scenario. Lookups go cache → storage → fixture
builder, and every write lands in both tiers.

Storage is best-effort. A ``StorageUnavailableError`` is logged and
absorbed: failed reads count as "nothing persisted", failed writes still
update the process cache, and a scenario selection that storage could not
keep is remembered in-process.

Called by: api.py (DemoApi), scripts/demo_scenario.py
Depends on: core/protocols.py, fixtures.py, scenarios.py
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pydantic import ValidationError

from picks_demo.config import Settings
from picks_demo.core.protocols import KeyValueStorage, StorageUnavailableError
from picks_demo.demo.fixtures import build_demo_data
from picks_demo.demo.scenarios import DEFAULT_DEMO_SCENARIO, DemoScenarioId, is_scenario_id
from picks_demo.models.schemas import DemoData

logger = logging.getLogger(__name__)

DatasetUpdater = Callable[[DemoData], DemoData]


class DemoStore:
    """Owns the one DemoData per scenario.

    Callers never mutate a returned dataset. Changes go through
    ``update_dataset`` with a function that returns a new value.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        settings: Settings,
        builder: Callable[[DemoScenarioId], DemoData] = build_demo_data,
    ) -> None:
        self._storage = storage
        self._settings = settings
        self._builder = builder
        self._cache: dict[str, DemoData] = {}
        # Last selection made through this store, and whether storage accepted it.
        self._active: DemoScenarioId | None = None
        self._active_persisted = False
        default = settings.demo_default_scenario
        self._default_scenario: DemoScenarioId = (
            default if is_scenario_id(default) else DEFAULT_DEMO_SCENARIO
        )

    def clear(self) -> None:
        """Drop every cached dataset. Durable storage is left alone."""
        self._cache.clear()

    def cached_scenarios(self) -> list[str]:
        return sorted(self._cache)

    # ─── Best-effort storage access ───────────────────────────────────────

    async def _read(self, key: str) -> str | None:
        try:
            return await self._storage.get(key)
        except StorageUnavailableError as exc:
            logger.warning("demo_storage_read_failed; treating as empty: key=%s error=%s", key, exc)
            return None

    async def _write(self, key: str, value: str) -> bool:
        try:
            await self._storage.set(key, value)
        except StorageUnavailableError as exc:
            logger.warning("demo_storage_write_failed; keeping in-memory copy: key=%s error=%s", key, exc)
            return False
        return True

    async def _remove(self, key: str) -> None:
        try:
            await self._storage.delete(key)
        except StorageUnavailableError as exc:
            logger.warning("demo_storage_delete_failed: key=%s error=%s", key, exc)

    # ─── Scenario selection ───────────────────────────────────────────────

    async def get_active_scenario(self) -> DemoScenarioId:
        """Return the selected scenario.

        Storage wins while it holds what this store last wrote (other workers
        may have switched since). If the last selection never reached storage,
        or storage has nothing usable, the in-process selection is used, then
        the configured default.
        """
        if self._active is not None and not self._active_persisted:
            return self._active
        stored = await self._read(self._settings.demo_state_key)
        if is_scenario_id(stored):
            return stored  # type: ignore[return-value]
        if stored is not None:
            logger.warning("Ignoring unknown stored demo scenario '%s'", stored)
        return self._active or self._default_scenario

    async def set_active_scenario(self, scenario: str) -> None:
        """Select ``scenario`` and force its dataset to be reloaded.

        Raises:
            ValueError: If ``scenario`` is not a known scenario id.
        """
        if not is_scenario_id(scenario):
            raise ValueError(f"Unknown demo scenario: '{scenario}'")
        self._active = scenario  # type: ignore[assignment]
        self._active_persisted = await self._write(self._settings.demo_state_key, scenario)
        self._cache.pop(scenario, None)
        logger.info("Demo scenario switched to '%s'", scenario)

    async def reset_scenario_data(self, scenario: str | None = None) -> DemoScenarioId:
        """Forget the dataset of ``scenario`` (default: the active one) in both tiers.

        Returns:
            The scenario that was reset.
        """
        target = scenario if is_scenario_id(scenario) else await self.get_active_scenario()
        self._cache.pop(target, None)
        await self._remove(self._settings.demo_data_key(target))
        logger.info("Demo data reset for scenario '%s'", target)
        return target  # type: ignore[return-value]

    # ─── Dataset access ───────────────────────────────────────────────────

    async def _load_persisted(self, scenario: str) -> DemoData | None:
        raw = await self._read(self._settings.demo_data_key(scenario))
        if not raw:
            return None
        try:
            data = DemoData.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning(
                "Discarding unreadable demo data for '%s' (%d errors)",
                scenario,
                exc.error_count(),
            )
            return None
        if data.scenario != scenario:
            logger.warning(
                "Discarding demo data stored under '%s' that belongs to '%s'",
                scenario,
                data.scenario,
            )
            return None
        return data

    async def _save(self, scenario: str, data: DemoData) -> None:
        self._cache[scenario] = data
        await self._write(self._settings.demo_data_key(scenario), data.model_dump_json())

    async def _dataset_for(self, scenario: DemoScenarioId) -> DemoData:
        cached = self._cache.get(scenario)
        if cached is not None:
            return cached

        stored = await self._load_persisted(scenario)
        if stored is not None:
            logger.debug("Demo data for '%s' restored from storage", scenario)
            self._cache[scenario] = stored
            return stored

        fresh = self._builder(scenario)
        logger.info("Built fresh demo data for scenario '%s'", scenario)
        await self._save(scenario, fresh)
        return fresh

    async def get_dataset(self) -> DemoData:
        """Return the active scenario's dataset, building it on first access."""
        return await self._dataset_for(await self.get_active_scenario())

    async def update_dataset(self, updater: DatasetUpdater) -> DemoData:
        """Replace the active dataset with ``updater(current)`` and return it."""
        scenario = await self.get_active_scenario()
        current = await self._dataset_for(scenario)
        updated = updater(current)
        await self._save(scenario, updated)
        return updated
