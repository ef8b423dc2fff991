"""demo_routes.py: Demo API mirroring every endpoint of the real backend.

Serves the active scenario's dataset at the same paths the real backend
uses, so the frontend needs zero changes. Used when DEMO_MODE=true.

Design principles:
    - Same URL paths and {data}/{error} envelope as the real backend
    - No auth (the demo user is always signed in)
    - No DB: all data comes from the demo store
    - Envelope errors map to HTTP status codes via ERROR_STATUS

Called by: main.py (mounted when DEMO_MODE=true)
Depends on: api/deps.py, demo/api.py, core/environment.py
"""

from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from picks_demo.api.deps import ConfigDep, DemoApiDep
from picks_demo.core.environment import get_environment_info, to_dict
from picks_demo.demo.api import ERROR_STATUS
from picks_demo.models.schemas import (
    ApiResponse,
    LoginForm,
    PickCreate,
    RaceResultsSubmission,
    RegisterForm,
    ScenarioReset,
    ScenarioSwitch,
)

logger = logging.getLogger(__name__)

router = APIRouter()
api_router = APIRouter(prefix="/api")


def respond(response: ApiResponse, status_code: int = 200) -> JSONResponse:
    """Render an envelope, choosing the status code from its error message."""
    if not response.ok:
        status_code = ERROR_STATUS.get(response.error, 400)
        logger.debug("Demo: error envelope '%s' → %d", response.error, status_code)
    return JSONResponse(status_code=status_code, content=response.to_body())


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("/health", tags=["health"])
async def health(config: ConfigDep):
    """Health check. Reports the environment so the frontend can detect demo mode."""
    info = get_environment_info(config)
    return {
        "status": "healthy",
        "version": info.version,
        "mode": info.mode,
        "environment": to_dict(info),
    }


@api_router.get("/environment", tags=["health"])
async def environment(config: ConfigDep):
    return to_dict(get_environment_info(config))


# ═══════════════════════════════════════════════════════════════════════════════
# AUTH
# ═══════════════════════════════════════════════════════════════════════════════


@api_router.post("/auth/login", tags=["auth"])
async def login(body: LoginForm, demo: DemoApiDep):
    """Sign in as the demo user. Credentials are not checked."""
    return respond(await demo.login(body))


@api_router.post("/auth/register", status_code=201, tags=["auth"])
async def register(body: RegisterForm, demo: DemoApiDep):
    """Merge the submitted profile into the demo user."""
    return respond(await demo.register(body), status_code=201)


@api_router.post("/auth/logout", tags=["auth"])
async def logout(demo: DemoApiDep):
    return respond(await demo.logout())


@api_router.get("/auth/me", tags=["auth"])
async def me(demo: DemoApiDep):
    return respond(await demo.get_current_user())


# ═══════════════════════════════════════════════════════════════════════════════
# SEASONS / DRIVERS
# ═══════════════════════════════════════════════════════════════════════════════


@api_router.get("/seasons/current", tags=["seasons"])
async def current_season(demo: DemoApiDep):
    return respond(await demo.get_current_season())


@api_router.get("/drivers", tags=["drivers"])
async def list_drivers(demo: DemoApiDep):
    return respond(await demo.get_drivers())


@api_router.get("/drivers/available", tags=["drivers"])
async def available_drivers(demo: DemoApiDep):
    """Every driver with an availability flag for the current race."""
    return respond(await demo.get_available_drivers())


# ═══════════════════════════════════════════════════════════════════════════════
# RACES
# ═══════════════════════════════════════════════════════════════════════════════


@api_router.get("/races", tags=["races"])
async def list_races(demo: DemoApiDep):
    return respond(await demo.get_races())


@api_router.get("/races/current", tags=["races"])
async def current_race(demo: DemoApiDep):
    return respond(await demo.get_current_race())


@api_router.get("/races/{race_id}", tags=["races"])
async def get_race(race_id: int, demo: DemoApiDep):
    return respond(await demo.get_race(race_id))


@api_router.get("/races/{race_id}/results", tags=["races"])
async def race_results(race_id: int, demo: DemoApiDep):
    """Results and other players' picks for one race."""
    return respond(await demo.get_race_results(race_id))


@api_router.get("/races/{race_id}/pick-window", tags=["races"])
async def race_pick_window(race_id: int, demo: DemoApiDep):
    return respond(await demo.get_pick_window(race_id))


# ═══════════════════════════════════════════════════════════════════════════════
# PICKS / LEADERBOARD
# ═══════════════════════════════════════════════════════════════════════════════


@api_router.get("/picks", tags=["picks"])
async def list_picks(demo: DemoApiDep):
    return respond(await demo.get_picks())


@api_router.post("/picks", tags=["picks"])
async def create_pick(body: PickCreate, demo: DemoApiDep):
    """Pick a driver for a race, replacing any earlier pick for that race."""
    return respond(await demo.create_pick(body.race_id, body.driver_id))


@api_router.get("/leaderboard", tags=["leaderboard"])
async def leaderboard(demo: DemoApiDep):
    return respond(await demo.get_leaderboard())


# ═══════════════════════════════════════════════════════════════════════════════
# ADMIN
# ═══════════════════════════════════════════════════════════════════════════════


@api_router.post("/admin/races/{race_id}/results", tags=["admin"])
async def submit_results(race_id: int, body: RaceResultsSubmission, demo: DemoApiDep):
    """Accept a manual results submission. Nothing is scored or stored."""
    return respond(await demo.submit_race_results(race_id, body.results))


@api_router.post("/admin/sync-results", tags=["admin"])
async def sync_results(demo: DemoApiDep):
    return respond(await demo.trigger_sync())


# ═══════════════════════════════════════════════════════════════════════════════
# DEMO CONTROL
# ═══════════════════════════════════════════════════════════════════════════════


@api_router.get("/demo/scenarios", tags=["demo"])
async def list_scenarios(demo: DemoApiDep):
    return respond(await demo.list_scenarios())


@api_router.put("/demo/scenario", tags=["demo"])
async def switch_scenario(body: ScenarioSwitch, demo: DemoApiDep):
    """Select the scenario every other endpoint serves."""
    return respond(await demo.switch_scenario(body.scenario))


@api_router.post("/demo/reset", tags=["demo"])
async def reset_scenario(demo: DemoApiDep, body: ScenarioReset | None = None):
    """Throw away edits to a scenario (default: the active one)."""
    return respond(await demo.reset_scenario(body.scenario if body else None))
