"""Tests for pick-window computation (demo/pick_window.py)."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from picks_demo.demo.fixtures import build_race
from picks_demo.demo.pick_window import (
    get_pick_window,
    pick_deadline,
    week_start_monday,
)

# Saturday qualifying, 2026-03-21 06:00 UTC.
QUALI = datetime(2026, 3, 21, 6, 0, tzinfo=UTC)
MONDAY = datetime(2026, 3, 16, 0, 0, tzinfo=UTC)


def _race(**overrides):
    fields = {
        "id": 1,
        "round": 1,
        "name": "Test Grand Prix",
        "location": "Nowhere",
        "circuit": "Test Circuit",
        "country_code": "XX",
        "quali_time": QUALI,
        "race_time": QUALI + timedelta(days=1),
    }
    fields.update(overrides)
    return build_race(QUALI, **fields)


def test_week_start_monday():
    assert week_start_monday(QUALI) == MONDAY
    assert week_start_monday(MONDAY) == MONDAY
    assert week_start_monday(MONDAY - timedelta(seconds=1)) == datetime(2026, 3, 9, tzinfo=UTC)


@pytest.mark.parametrize(
    ("now", "status"),
    [
        (MONDAY - timedelta(minutes=1), "too_early"),
        (MONDAY, "open"),
        (QUALI - timedelta(minutes=11), "open"),
        (QUALI - timedelta(minutes=10), "locked"),
        (QUALI + timedelta(hours=1), "locked"),
    ],
)
def test_status_boundaries(now, status):
    window = get_pick_window(_race(), now=now)
    assert window.status == status
    assert window.is_open is (status == "open")


def test_regular_weekend_closes_before_qualifying():
    window = get_pick_window(_race(), now=MONDAY)
    assert window.deadline_session == "qualifying"
    assert window.opens_at == MONDAY
    assert window.closes_at == QUALI - timedelta(minutes=10)


def test_sprint_weekend_closes_before_sprint_qualifying():
    sprint_quali = QUALI - timedelta(days=1)
    race = _race(has_sprint=True, sprint_quali_time=sprint_quali)

    assert pick_deadline(race) == sprint_quali - timedelta(minutes=10)
    window = get_pick_window(race, now=sprint_quali - timedelta(minutes=5))
    assert window.deadline_session == "sprint_qualifying"
    assert window.status == "locked"


def test_sprint_flag_without_sprint_time_uses_qualifying():
    race = _race(has_sprint=True)
    assert pick_deadline(race) == QUALI - timedelta(minutes=10)


def test_as_dict_is_json_friendly():
    body = get_pick_window(_race(), now=MONDAY).as_dict()
    assert body == {
        "status": "open",
        "is_open": True,
        "opens_at": MONDAY.isoformat(),
        "closes_at": (QUALI - timedelta(minutes=10)).isoformat(),
        "deadline_session": "qualifying",
    }
