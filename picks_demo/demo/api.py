"""api.py: Endpoint-shaped operations over the demo store.

Each coroutine mirrors one endpoint of the real backend and returns an
``ApiResponse`` envelope carrying either ``data`` or an ``error`` message.
Nothing raises across this boundary.

Called by: api/routes/demo_routes.py, tests
Depends on: store.py, factory.py, pick_window.py, scenarios.py
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, TypeVar

from picks_demo.demo import factory
from picks_demo.demo.pick_window import get_pick_window
from picks_demo.demo.scenarios import DEMO_SCENARIOS, is_scenario_id
from picks_demo.demo.store import DemoStore
from picks_demo.models.schemas import (
    ApiResponse,
    DemoData,
    Driver,
    DriverWithAvailability,
    LoginForm,
    PickWithDetails,
    RegisterForm,
    ResultRow,
)

logger = logging.getLogger(__name__)

# ─── Error Messages ───────────────────────────────────────────────────────────

RACE_NOT_FOUND = "Race not found"
PICK_NOT_CREATED = "Unable to create pick"
UNKNOWN_SCENARIO = "Unknown scenario"

ERROR_STATUS: dict[str, int] = {
    RACE_NOT_FOUND: 404,
    PICK_NOT_CREATED: 422,
    UNKNOWN_SCENARIO: 400,
}

_Entity = TypeVar("_Entity")


def ok(data: Any) -> ApiResponse:
    return ApiResponse(data=data)


def fail(message: str) -> ApiResponse:
    return ApiResponse(error=message)


def find_by_id(items: Sequence[_Entity], entity_id: int) -> _Entity | None:
    return next((item for item in items if item.id == entity_id), None)  # type: ignore[attr-defined]


# ─── Derivations ──────────────────────────────────────────────────────────────


def used_driver_ids(picks: Sequence[PickWithDetails], current_race_id: int) -> dict[int, str]:
    """Drivers already spent by picks in other races, mapped to that race's name.

    Wild-card races are exempt from the one-driver-once rule, so picks made
    there never use a driver up.
    """
    used: dict[int, str] = {}
    for pick in picks:
        if pick.race_id == current_race_id or pick.race.is_wild_card:
            continue
        used.setdefault(pick.driver_id, pick.race.name)
    return used


def build_available_drivers(
    drivers: Sequence[Driver],
    picks: Sequence[PickWithDetails],
    current_race_id: int,
) -> dict[str, Any]:
    used = used_driver_ids(picks, current_race_id)
    return {
        "drivers": [
            DriverWithAvailability(
                **driver.model_dump(),
                is_available=driver.id not in used,
                used_in_race=used.get(driver.id),
            )
            for driver in drivers
        ],
        "used_driver_ids": list(used),
    }


class DemoApi:
    """The mock backend: one coroutine per endpoint."""

    def __init__(self, store: DemoStore) -> None:
        self._store = store

    @property
    def store(self) -> DemoStore:
        return self._store

    # ═══════════════════════════════════════════════════════════════════════
    # AUTH
    # ═══════════════════════════════════════════════════════════════════════

    async def login(self, credentials: LoginForm) -> ApiResponse:
        """Credentials are ignored; the demo user is always signed in."""
        data = await self._store.get_dataset()
        logger.debug("Demo: login as '%s' (given '%s')", data.user.email, credentials.email)
        return ok({"user": data.user, "token": data.token})

    async def register(self, form: RegisterForm) -> ApiResponse:
        def merge_profile(current: DemoData) -> DemoData:
            user = current.user.model_copy(
                update={
                    "name": form.name,
                    "email": form.email,
                    "timezone": form.timezone or current.user.timezone,
                }
            )
            return current.model_copy(update={"user": user})

        updated = await self._store.update_dataset(merge_profile)
        return ok({"user": updated.user, "token": updated.token})

    async def logout(self) -> ApiResponse:
        return ok({"success": True})

    async def get_current_user(self) -> ApiResponse:
        data = await self._store.get_dataset()
        return ok({"user": data.user})

    # ═══════════════════════════════════════════════════════════════════════
    # SEASON / DRIVERS
    # ═══════════════════════════════════════════════════════════════════════

    async def get_current_season(self) -> ApiResponse:
        data = await self._store.get_dataset()
        return ok({"season": data.season})

    async def get_drivers(self) -> ApiResponse:
        data = await self._store.get_dataset()
        return ok({"drivers": data.drivers})

    async def get_available_drivers(self) -> ApiResponse:
        data = await self._store.get_dataset()
        return ok(build_available_drivers(data.drivers, data.picks, data.current_race_id))

    # ═══════════════════════════════════════════════════════════════════════
    # RACES
    # ═══════════════════════════════════════════════════════════════════════

    async def get_races(self) -> ApiResponse:
        data = await self._store.get_dataset()
        return ok({"races": data.races})

    async def get_current_race(self) -> ApiResponse:
        data = await self._store.get_dataset()
        race = find_by_id(data.races, data.current_race_id) or data.races[0]
        return ok({"race": race})

    async def get_race(self, race_id: int) -> ApiResponse:
        data = await self._store.get_dataset()
        race = find_by_id(data.races, race_id)
        if race is None:
            return fail(RACE_NOT_FOUND)
        return ok({"race": race})

    async def get_race_results(self, race_id: int) -> ApiResponse:
        data = await self._store.get_dataset()
        race = find_by_id(data.races, race_id)
        if race is None:
            return fail(RACE_NOT_FOUND)

        payload = data.race_results.get(race_id)
        if payload is not None:
            return ok(payload)
        return ok({"race": race, "results": [], "picks": []})

    async def get_pick_window(self, race_id: int | None = None) -> ApiResponse:
        """Pick window of ``race_id`` (default: the current race)."""
        data = await self._store.get_dataset()
        race = find_by_id(data.races, data.current_race_id if race_id is None else race_id)
        if race is None:
            return fail(RACE_NOT_FOUND)
        return ok({"race_id": race.id, "pick_window": get_pick_window(race).as_dict()})

    # ═══════════════════════════════════════════════════════════════════════
    # PICKS / LEADERBOARD
    # ═══════════════════════════════════════════════════════════════════════

    async def get_picks(self) -> ApiResponse:
        data = await self._store.get_dataset()
        return ok({"picks": data.picks})

    async def create_pick(self, race_id: int, driver_id: int) -> ApiResponse:
        """Pick ``driver_id`` for ``race_id``, replacing the user's earlier pick.

        Unknown race or driver ids leave the dataset untouched.
        """

        def replace_pick(current: DemoData) -> DemoData:
            race = find_by_id(current.races, race_id)
            driver = find_by_id(current.drivers, driver_id)
            if race is None or driver is None:
                logger.info("Demo: pick ignored (race=%s driver=%s)", race_id, driver_id)
                return current

            new_pick = factory.create_pick(current.user.id, race, driver)
            picks = [pick for pick in current.picks if pick.race_id != race_id]
            picks.append(new_pick)
            return current.model_copy(update={"picks": picks})

        updated = await self._store.update_dataset(replace_pick)
        pick = next((p for p in updated.picks if p.race_id == race_id), None)
        if pick is None:
            return fail(PICK_NOT_CREATED)
        logger.info("Demo: pick stored race=%s driver=%s", race_id, pick.driver_id)
        return ok({"pick": pick})

    async def get_leaderboard(self) -> ApiResponse:
        data = await self._store.get_dataset()
        return ok({"season": data.season, "standings": data.leaderboard})

    # ═══════════════════════════════════════════════════════════════════════
    # ADMIN
    # ═══════════════════════════════════════════════════════════════════════

    async def submit_race_results(self, race_id: int, results: Sequence[ResultRow]) -> ApiResponse:
        """Echo a manual results submission without scoring it."""
        data = await self._store.get_dataset()
        race = find_by_id(data.races, race_id)
        if race is None:
            return fail(RACE_NOT_FOUND)

        mapped = factory.create_submitted_results(race, results)
        logger.info("Demo: %d results submitted for race %s", len(mapped), race_id)
        return ok({"results": mapped, "race_status": race.status})

    async def trigger_sync(self) -> ApiResponse:
        return ok(
            {
                "status": "ok",
                "races_started": 1,
                "races_synced": [1, 2],
                "races_failed": [],
            }
        )

    # ═══════════════════════════════════════════════════════════════════════
    # DEMO CONTROL
    # ═══════════════════════════════════════════════════════════════════════

    async def list_scenarios(self) -> ApiResponse:
        active = await self._store.get_active_scenario()
        return ok(
            {
                "active": active,
                "scenarios": [
                    {"id": s.id, "label": s.label, "description": s.description}
                    for s in DEMO_SCENARIOS
                ],
            }
        )

    async def switch_scenario(self, scenario: str) -> ApiResponse:
        if not is_scenario_id(scenario):
            return fail(UNKNOWN_SCENARIO)
        await self._store.set_active_scenario(scenario)
        return ok({"active": await self._store.get_active_scenario()})

    async def reset_scenario(self, scenario: str | None = None) -> ApiResponse:
        if scenario is not None and not is_scenario_id(scenario):
            return fail(UNKNOWN_SCENARIO)
        target = await self._store.reset_scenario_data(scenario)
        return ok({"reset": target})
