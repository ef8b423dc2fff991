"""Pydantic v2 schemas for the demo dataset and API request bodies."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

RaceStatus = Literal["upcoming", "in_progress", "completed"]


class _Record(BaseModel):
    """Base for dataset records: immutable, replaced via ``model_copy``."""

    model_config = ConfigDict(frozen=True)


# ─── Season / Drivers / Races ──────────────────────────────────────────────────


class Season(_Record):
    id: int
    year: int
    name: str
    is_active: bool
    created_at: datetime


class Driver(_Record):
    id: int
    season_id: int
    code: str
    name: str
    number: int
    team: str
    team_color: str
    created_at: datetime


class DriverWithAvailability(Driver):
    is_available: bool
    # Name of the race the driver was already used in, if any.
    used_in_race: str | None = None


class Race(_Record):
    id: int
    season_id: int
    round: int
    name: str
    location: str
    circuit: str
    country_code: str
    has_sprint: bool = False
    quali_time: datetime
    sprint_quali_time: datetime | None = None
    race_time: datetime
    sprint_time: datetime | None = None
    is_wild_card: bool = False
    status: RaceStatus = "upcoming"
    created_at: datetime


# ─── Users ─────────────────────────────────────────────────────────────────────


class PublicUser(_Record):
    id: int
    email: str
    name: str
    timezone: str
    is_admin: bool = False
    created_at: datetime


# ─── Picks ─────────────────────────────────────────────────────────────────────


class Pick(_Record):
    id: int
    user_id: int
    race_id: int
    driver_id: int
    created_at: datetime


class PickWithDetails(Pick):
    driver: Driver
    race: Race
    points: int | None = None


class ScoredPick(PickWithDetails):
    """Another player's pick as shown on a race results page."""

    user_name: str
    points: int


# ─── Leaderboard / Results ─────────────────────────────────────────────────────


class LeaderboardEntry(_Record):
    rank: int
    user_id: int
    user_name: str
    total_points: int
    races_completed: int


class RaceResult(_Record):
    id: int
    race_id: int
    driver_id: int
    race_position: int | None = None
    sprint_position: int | None = None
    race_points: int = 0
    sprint_points: int = 0
    created_at: datetime


class RaceResultWithDriver(RaceResult):
    driver: Driver


class RaceResultsPayload(_Record):
    race: Race
    results: list[RaceResultWithDriver] = Field(default_factory=list)
    picks: list[ScoredPick] = Field(default_factory=list)


# ─── Aggregate ─────────────────────────────────────────────────────────────────


class DemoData(_Record):
    """Everything one demo scenario serves.

    Exactly one instance per scenario lives in the store at a time. Never
    mutate it: build a new one with ``model_copy(update=...)``.
    """

    scenario: str
    season: Season
    user: PublicUser
    token: str
    drivers: list[Driver]
    races: list[Race]
    picks: list[PickWithDetails]
    leaderboard: list[LeaderboardEntry]
    current_race_id: int
    race_results: dict[int, RaceResultsPayload] = Field(default_factory=dict)


# ─── Request Bodies ────────────────────────────────────────────────────────────


class LoginForm(BaseModel):
    email: str
    password: str


class RegisterForm(BaseModel):
    email: str = Field(..., min_length=3, max_length=200)
    name: str = Field(..., min_length=1, max_length=100)
    password: str
    timezone: str | None = None


class PickCreate(BaseModel):
    race_id: int
    driver_id: int


class ResultRow(BaseModel):
    driver_id: int
    race_position: int | None = None
    sprint_position: int | None = None


class RaceResultsSubmission(BaseModel):
    results: list[ResultRow]


class ScenarioSwitch(BaseModel):
    scenario: str


class ScenarioReset(BaseModel):
    scenario: str | None = None


# ─── Envelope ──────────────────────────────────────────────────────────────────


class ApiResponse(BaseModel):
    """Uniform response envelope: exactly one of ``data`` / ``error`` is set."""

    data: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_body(self) -> dict[str, Any]:
        """JSON-safe body with only the populated side of the envelope."""
        if self.error is not None:
            return {"error": self.error}
        return self.model_dump(mode="json", include={"data"})
