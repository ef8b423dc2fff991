"""fixtures.py: The fabricated 2026 season served by demo mode.

Builds the complete dataset for one scenario: season, drivers, calendar,
the demo user's picks, leaderboard and precomputed race results.

Design principles:
    - Fixed integer IDs so cross-entity references are stable and the
      frontend can hardcode them in tests
    - Race times are offsets from "now", so which races are past,
      in progress or upcoming is the same on every build
    - Never fails: only reads its own tables

Called by: store.py (on cache miss), tests
Depends on: scenarios.py, models/schemas.py
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from picks_demo.demo.scenarios import DemoScenarioId
from picks_demo.models.schemas import (
    DemoData,
    Driver,
    LeaderboardEntry,
    PickWithDetails,
    PublicUser,
    Race,
    RaceResultsPayload,
    RaceResultWithDriver,
    ScoredPick,
    Season,
)

CREATED_AT = datetime(2026, 1, 1, tzinfo=UTC)
SEASON_ID = 1
DEMO_USER_ID = 101

# Race the demo user picks for in every scenario except "locked".
OPEN_RACE_ID = 1
# Qualifying already started, so the pick window is closed.
LOCKED_RACE_ID = 6

# Points for positions 1..N on the synthesized results pages.
RACE_POINTS_START = 25
RACE_POINTS_STEP = 5
SPRINT_POINTS_START = 8
RESULTS_DEPTH = 6


def _from_now(now: datetime, *, days: int = 0, hours: int = 0, minutes: int = 0) -> datetime:
    return now + timedelta(days=days, hours=hours, minutes=minutes)


# ─── Season ───────────────────────────────────────────────────────────────────


def build_season() -> Season:
    return Season(
        id=SEASON_ID,
        year=2026,
        name="2026 Season",
        is_active=True,
        created_at=CREATED_AT,
    )


# ─── Drivers ──────────────────────────────────────────────────────────────────
# (id, code, name, number, team, team_color)

_DRIVER_TABLE: list[tuple[int, str, str, int, str, str]] = [
    (1, "VER", "Max Verstappen", 1, "Red Bull Racing", "#3671C6"),
    (2, "PER", "Sergio Perez", 11, "Red Bull Racing", "#3671C6"),
    (3, "HAM", "Lewis Hamilton", 44, "Ferrari", "#E8002D"),
    (4, "LEC", "Charles Leclerc", 16, "Ferrari", "#E8002D"),
    (5, "NOR", "Lando Norris", 4, "McLaren", "#FF8000"),
    (6, "PIA", "Oscar Piastri", 81, "McLaren", "#FF8000"),
    (7, "RUS", "George Russell", 63, "Mercedes", "#6CD3BF"),
    (8, "ALO", "Fernando Alonso", 14, "Aston Martin", "#229971"),
    (9, "SAI", "Carlos Sainz", 55, "Williams", "#005AFF"),
    (10, "GAS", "Pierre Gasly", 10, "Alpine", "#0090FF"),
]


def build_drivers() -> list[Driver]:
    return [
        Driver(
            id=driver_id,
            season_id=SEASON_ID,
            code=code,
            name=name,
            number=number,
            team=team,
            team_color=color,
            created_at=CREATED_AT,
        )
        for driver_id, code, name, number, team, color in _DRIVER_TABLE
    ]


# ─── Races ────────────────────────────────────────────────────────────────────


def build_race(now: datetime, **fields: Any) -> Race:
    """Build a race, filling schedule defaults relative to ``now``.

    Required fields: id, round, name, location, circuit, country_code.
    """
    fields.setdefault("quali_time", _from_now(now, days=2, hours=14))
    fields.setdefault("race_time", _from_now(now, days=3, hours=14))
    return Race(season_id=SEASON_ID, created_at=CREATED_AT, **fields)


def build_races(now: datetime) -> list[Race]:
    """The six-round calendar, in round order.

    Rounds 1-2 are completed, round 3 is in progress, round 4 is the open
    pick race, round 5 is the wild card and round 6 has already started
    qualifying (used by the "locked" scenario).
    """
    return [
        build_race(
            now,
            id=5,
            round=1,
            name="Japanese Grand Prix",
            location="Suzuka",
            circuit="Suzuka Circuit",
            country_code="JP",
            quali_time=_from_now(now, days=-15, hours=6),
            race_time=_from_now(now, days=-14, hours=6),
            status="completed",
        ),
        build_race(
            now,
            id=4,
            round=2,
            name="Chinese Grand Prix",
            location="Shanghai",
            circuit="Shanghai International Circuit",
            country_code="CN",
            has_sprint=True,
            sprint_quali_time=_from_now(now, days=-9, hours=8),
            quali_time=_from_now(now, days=-8, hours=10),
            sprint_time=_from_now(now, days=-8, hours=6),
            race_time=_from_now(now, days=-7, hours=10),
            status="completed",
        ),
        build_race(
            now,
            id=3,
            round=3,
            name="Australian Grand Prix",
            location="Melbourne",
            circuit="Albert Park Circuit",
            country_code="AU",
            quali_time=_from_now(now, hours=-22),
            race_time=_from_now(now, hours=4),
            status="in_progress",
        ),
        build_race(
            now,
            id=1,
            round=4,
            name="Bahrain Grand Prix",
            location="Sakhir",
            circuit="Bahrain International Circuit",
            country_code="BH",
            quali_time=_from_now(now, days=2, hours=12),
            race_time=_from_now(now, days=3, hours=12),
            status="upcoming",
        ),
        build_race(
            now,
            id=2,
            round=5,
            name="Saudi Arabian Grand Prix",
            location="Jeddah",
            circuit="Jeddah Corniche Circuit",
            country_code="SA",
            has_sprint=True,
            sprint_quali_time=_from_now(now, days=9, hours=11),
            quali_time=_from_now(now, days=10, hours=15),
            sprint_time=_from_now(now, days=10, hours=10),
            race_time=_from_now(now, days=11, hours=15),
            status="upcoming",
            is_wild_card=True,
        ),
        build_race(
            now,
            id=LOCKED_RACE_ID,
            round=6,
            name="Monaco Grand Prix",
            location="Monte Carlo",
            circuit="Circuit de Monaco",
            country_code="MC",
            quali_time=_from_now(now, hours=-6),
            race_time=_from_now(now, hours=18),
            status="upcoming",
        ),
    ]


# ─── Users ────────────────────────────────────────────────────────────────────


def build_user(scenario: DemoScenarioId) -> PublicUser:
    is_admin = scenario == "admin"
    return PublicUser(
        id=DEMO_USER_ID,
        email="admin@f1picks.demo" if is_admin else "demo@f1picks.demo",
        name="Race Director" if is_admin else "Demo Driver",
        timezone="America/New_York",
        is_admin=is_admin,
        created_at=CREATED_AT,
    )


def build_token(scenario: DemoScenarioId) -> str:
    return f"demo-token-{scenario}"


# ─── Picks ────────────────────────────────────────────────────────────────────
# (pick id, race id, driver id, points)
# Race 2 (the wild card) is deliberately never picked here.

_SEASON_PICKS: list[tuple[int, int, int, int | None]] = [
    (1, 5, 1, 18),
    (2, 4, 3, 25),
    (3, 3, 7, None),
    (4, OPEN_RACE_ID, 2, None),
]

_LOCKED_PICK = (99, LOCKED_RACE_ID, 5, None)


def build_pick(
    *,
    pick_id: int,
    user_id: int,
    race: Race,
    driver: Driver,
    points: int | None = None,
) -> PickWithDetails:
    return PickWithDetails(
        id=pick_id,
        user_id=user_id,
        race_id=race.id,
        driver_id=driver.id,
        created_at=race.race_time,
        driver=driver,
        race=race,
        points=points,
    )


def build_picks(
    scenario: DemoScenarioId,
    user: PublicUser,
    races: dict[int, Race],
    drivers: dict[int, Driver],
) -> list[PickWithDetails]:
    if scenario == "fresh":
        return []

    table = list(_SEASON_PICKS)
    if scenario == "locked":
        table.append(_LOCKED_PICK)

    picks = []
    for pick_id, race_id, driver_id, points in table:
        race = races.get(race_id)
        driver = drivers.get(driver_id)
        if race is None or driver is None:
            continue
        picks.append(
            build_pick(pick_id=pick_id, user_id=user.id, race=race, driver=driver, points=points)
        )
    return picks


# ─── Leaderboard ──────────────────────────────────────────────────────────────


def build_leaderboard(scenario: DemoScenarioId, user: PublicUser) -> list[LeaderboardEntry]:
    if scenario == "fresh":
        return [
            LeaderboardEntry(
                rank=1,
                user_id=user.id,
                user_name=user.name,
                total_points=0,
                races_completed=0,
            ),
        ]

    # (rank, user id, name, points)
    rows = [
        (1, 201, "Casey", 92),
        (2, 202, "Jordan", 86),
        (3, user.id, user.name, 79),
        (4, 203, "Sam", 71),
    ]
    return [
        LeaderboardEntry(
            rank=rank,
            user_id=user_id,
            user_name=name,
            total_points=points,
            races_completed=3,
        )
        for rank, user_id, name, points in rows
    ]


# ─── Race Results ─────────────────────────────────────────────────────────────


def race_points_for(index: int) -> int:
    """Race points for the finisher at zero-based ``index``: 25, 20, 15 ... 0."""
    return max(RACE_POINTS_START - index * RACE_POINTS_STEP, 0)


def sprint_points_for(index: int) -> int:
    return max(SPRINT_POINTS_START - index, 0)


def build_results(race: Race, drivers: list[Driver]) -> list[RaceResultWithDriver]:
    """Synthesized finishing order: the first drivers by id, in id order."""
    return [
        RaceResultWithDriver(
            id=race.id * 100 + driver.id,
            race_id=race.id,
            driver_id=driver.id,
            race_position=index + 1,
            sprint_position=index + 1 if race.has_sprint else None,
            race_points=race_points_for(index),
            sprint_points=sprint_points_for(index) if race.has_sprint else 0,
            created_at=race.race_time,
            driver=driver,
        )
        for index, driver in enumerate(drivers[:RESULTS_DEPTH])
    ]


def build_race_results(
    user: PublicUser,
    races: dict[int, Race],
    drivers: list[Driver],
) -> dict[int, RaceResultsPayload]:
    driver_by_id = {driver.id: driver for driver in drivers}
    china = races[4]
    japan = races[5]

    # (pick id, user id, name, driver id, points)
    china_picks = [
        (301, 201, "Casey", 1, 26),
        (302, 202, "Jordan", 3, 24),
        (303, user.id, user.name, 5, 18),
    ]
    scored = [
        ScoredPick(
            id=pick_id,
            user_id=user_id,
            race_id=china.id,
            driver_id=driver_id,
            created_at=china.race_time,
            driver=driver_by_id[driver_id],
            race=china,
            user_name=name,
            points=points,
        )
        for pick_id, user_id, name, driver_id, points in china_picks
    ]

    return {
        china.id: RaceResultsPayload(race=china, results=build_results(china, drivers), picks=scored),
        japan.id: RaceResultsPayload(race=japan, results=build_results(japan, drivers), picks=[]),
    }


# ─── Dataset ──────────────────────────────────────────────────────────────────


def build_demo_data(scenario: DemoScenarioId, now: datetime | None = None) -> DemoData:
    """Build the full dataset for ``scenario``.

    Args:
        scenario: Which scenario variant to build.
        now: Reference time for the race schedule (defaults to current UTC time).

    Returns:
        A new DemoData aggregate.
    """
    now = now or datetime.now(UTC)
    season = build_season()
    drivers = build_drivers()
    races = build_races(now)
    user = build_user(scenario)

    race_by_id = {race.id: race for race in races}
    driver_by_id = {driver.id: driver for driver in drivers}

    return DemoData(
        scenario=scenario,
        season=season,
        user=user,
        token=build_token(scenario),
        drivers=drivers,
        races=races,
        picks=build_picks(scenario, user, race_by_id, driver_by_id),
        leaderboard=build_leaderboard(scenario, user),
        current_race_id=LOCKED_RACE_ID if scenario == "locked" else OPEN_RACE_ID,
        race_results=build_race_results(user, race_by_id, drivers),
    )
