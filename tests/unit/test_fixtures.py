"""Tests for the scenario registry and the fixture builder.

Run with: uv run pytest tests/unit/test_fixtures.py -v
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from picks_demo.demo.fixtures import (
    LOCKED_RACE_ID,
    OPEN_RACE_ID,
    build_demo_data,
    race_points_for,
)
from picks_demo.demo.scenarios import (
    DEFAULT_DEMO_SCENARIO,
    DEMO_SCENARIOS,
    SCENARIO_IDS,
    get_scenario,
    is_scenario_id,
)

NOW = datetime(2026, 3, 18, 12, 0, tzinfo=UTC)


# ─── Scenario registry ────────────────────────────────────────────────────────


def test_scenarios_are_ordered_and_default_is_showcase():
    assert [s.id for s in DEMO_SCENARIOS] == ["showcase", "fresh", "locked", "admin"]
    assert DEFAULT_DEMO_SCENARIO == "showcase"
    assert SCENARIO_IDS == {"showcase", "fresh", "locked", "admin"}


def test_scenario_lookup():
    assert get_scenario("locked").label == "Locked Picks"
    assert is_scenario_id("fresh") is True
    assert is_scenario_id("bogus") is False
    assert is_scenario_id(None) is False
    with pytest.raises(KeyError):
        get_scenario("bogus")


# ─── Base dataset ─────────────────────────────────────────────────────────────


@pytest.mark.parametrize("scenario", sorted(SCENARIO_IDS))
def test_base_shape_is_shared_by_every_scenario(scenario):
    data = build_demo_data(scenario, now=NOW)

    assert data.scenario == scenario
    assert data.season.year == 2026
    assert len(data.drivers) == 10
    assert [d.id for d in data.drivers] == list(range(1, 11))
    assert [r.round for r in data.races] == [1, 2, 3, 4, 5, 6]
    assert data.token == f"demo-token-{scenario}"
    assert data.current_race_id in {race.id for race in data.races}
    assert set(data.race_results) == {4, 5}


def test_race_states_are_relative_to_now():
    data = build_demo_data("showcase", now=NOW)
    by_id = {race.id: race for race in data.races}

    assert by_id[5].status == "completed" and by_id[5].race_time < NOW
    assert by_id[4].status == "completed" and by_id[4].has_sprint
    assert by_id[3].status == "in_progress"
    assert by_id[3].quali_time < NOW < by_id[3].race_time
    assert by_id[1].status == "upcoming" and by_id[1].quali_time > NOW
    assert by_id[6].quali_time < NOW
    assert [r.id for r in data.races if r.is_wild_card] == [2]


def test_driver_identity_is_stable_across_scenarios():
    showcase = build_demo_data("showcase", now=NOW)
    admin = build_demo_data("admin", now=NOW)
    assert showcase.drivers == admin.drivers


# ─── Scenario variations ──────────────────────────────────────────────────────


def test_fresh_has_no_picks_and_single_zero_leaderboard_entry():
    data = build_demo_data("fresh", now=NOW)

    assert data.picks == []
    assert len(data.leaderboard) == 1
    entry = data.leaderboard[0]
    assert entry.rank == 1
    assert entry.user_id == data.user.id
    assert entry.total_points == 0
    assert entry.races_completed == 0


def test_showcase_seeds_four_picks_with_two_scored():
    data = build_demo_data("showcase", now=NOW)

    assert [(p.race_id, p.driver_id) for p in data.picks] == [(5, 1), (4, 3), (3, 7), (1, 2)]
    assert len({p.race_id for p in data.picks}) == 4
    assert [p.points for p in data.picks] == [18, 25, None, None]
    assert all(p.user_id == data.user.id for p in data.picks)
    assert data.current_race_id == OPEN_RACE_ID
    assert [e.rank for e in data.leaderboard] == [1, 2, 3, 4]


def test_locked_adds_pick_on_started_race_and_makes_it_current():
    data = build_demo_data("locked", now=NOW)

    assert data.current_race_id == LOCKED_RACE_ID
    locked_pick = next(p for p in data.picks if p.race_id == LOCKED_RACE_ID)
    assert locked_pick.id == 99
    assert locked_pick.driver_id == 5
    assert locked_pick.race.quali_time < NOW
    assert len(data.picks) == 5


def test_admin_user_identity_and_leaderboard_label():
    data = build_demo_data("admin", now=NOW)

    assert data.user.is_admin is True
    assert data.user.name == "Race Director"
    assert data.user.email == "admin@f1picks.demo"
    assert data.leaderboard[2].user_name == "Race Director"
    assert build_demo_data("showcase", now=NOW).user.is_admin is False


# ─── Race results ─────────────────────────────────────────────────────────────


def test_race_points_schedule():
    assert [race_points_for(i) for i in range(7)] == [25, 20, 15, 10, 5, 0, 0]


def test_sprint_race_results_carry_sprint_points_and_other_picks():
    payload = build_demo_data("showcase", now=NOW).race_results[4]

    assert payload.race.id == 4
    assert [r.race_position for r in payload.results] == [1, 2, 3, 4, 5, 6]
    assert [r.race_points for r in payload.results] == [25, 20, 15, 10, 5, 0]
    assert [r.sprint_points for r in payload.results] == [8, 7, 6, 5, 4, 3]
    assert [p.user_name for p in payload.picks] == ["Casey", "Jordan", "Demo Driver"]
    assert [p.points for p in payload.picks] == [26, 24, 18]


def test_non_sprint_results_have_no_sprint_data_and_no_picks():
    payload = build_demo_data("showcase", now=NOW).race_results[5]

    assert all(r.sprint_position is None for r in payload.results)
    assert all(r.sprint_points == 0 for r in payload.results)
    assert payload.picks == []
