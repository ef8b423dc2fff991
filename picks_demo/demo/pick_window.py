"""pick_window.py: When a player may lock in a pick for a race.

The window opens Monday 00:00 UTC of the week containing qualifying and
closes 10 minutes before the first qualifying session of the weekend
(sprint qualifying on sprint weekends).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Literal

from picks_demo.models.schemas import Race

PickWindowStatus = Literal["too_early", "open", "locked"]
DeadlineSession = Literal["qualifying", "sprint_qualifying"]

DEADLINE_LEAD = timedelta(minutes=10)


@dataclass(frozen=True)
class PickWindow:
    status: PickWindowStatus
    opens_at: datetime
    closes_at: datetime
    deadline_session: DeadlineSession

    @property
    def is_open(self) -> bool:
        return self.status == "open"

    def as_dict(self) -> dict:
        return {
            "status": self.status,
            "is_open": self.is_open,
            "opens_at": self.opens_at.isoformat(),
            "closes_at": self.closes_at.isoformat(),
            "deadline_session": self.deadline_session,
        }


def week_start_monday(moment: datetime) -> datetime:
    """Monday 00:00 UTC of the week containing ``moment``."""
    moment = moment.astimezone(UTC)
    monday = moment - timedelta(days=moment.weekday())
    return monday.replace(hour=0, minute=0, second=0, microsecond=0)


def _deadline_session(race: Race) -> DeadlineSession:
    if race.has_sprint and race.sprint_quali_time is not None:
        return "sprint_qualifying"
    return "qualifying"


def pick_deadline(race: Race) -> datetime:
    """Last moment a pick is accepted for ``race``."""
    if _deadline_session(race) == "sprint_qualifying":
        session_start = race.sprint_quali_time
    else:
        session_start = race.quali_time
    return session_start - DEADLINE_LEAD


def get_pick_window(race: Race, now: datetime | None = None) -> PickWindow:
    """Compute the pick window for ``race`` as of ``now``."""
    now = now or datetime.now(UTC)
    opens_at = week_start_monday(race.quali_time)
    closes_at = pick_deadline(race)

    if now < opens_at:
        status: PickWindowStatus = "too_early"
    elif now >= closes_at:
        status = "locked"
    else:
        status = "open"

    return PickWindow(
        status=status,
        opens_at=opens_at,
        closes_at=closes_at,
        deadline_session=_deadline_session(race),
    )
