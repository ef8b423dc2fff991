"""factory.py: On-demand object factory for the demo write endpoints.

Unlike fixtures.py, which builds a whole scenario up front, these
functions create one fresh object per call (a new pick, the rows of a
manual results submission).

Called by: api.py (create_pick, submit_race_results)
Depends on: models/schemas.py
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from datetime import UTC, datetime

from picks_demo.models.schemas import Driver, PickWithDetails, Race, RaceResult, ResultRow


def _now() -> datetime:
    return datetime.now(UTC)


def next_pick_id() -> int:
    """Millisecond timestamp, unique enough for a single demo user."""
    return int(time.time() * 1000)


def create_pick(user_id: int, race: Race, driver: Driver) -> PickWithDetails:
    """Build a new pick for ``user_id`` with the race and driver embedded.

    Points stay unset until the race is scored.
    """
    return PickWithDetails(
        id=next_pick_id(),
        user_id=user_id,
        race_id=race.id,
        driver_id=driver.id,
        created_at=_now(),
        race=race,
        driver=driver,
    )


def create_submitted_results(race: Race, rows: Iterable[ResultRow]) -> list[RaceResult]:
    """Map manually submitted rows to stored-shaped results.

    IDs are ``race_id * 1000 + row index``. Scoring is not computed in demo
    mode, so both point fields are zero.
    """
    created_at = _now()
    return [
        RaceResult(
            id=race.id * 1000 + index,
            race_id=race.id,
            driver_id=row.driver_id,
            race_position=row.race_position,
            sprint_position=row.sprint_position,
            race_points=0,
            sprint_points=0,
            created_at=created_at,
        )
        for index, row in enumerate(rows)
    ]
