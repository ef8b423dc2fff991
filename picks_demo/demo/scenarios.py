"""scenarios.py: The named demo scenarios.

Each scenario is a self-contained dataset variant the presenter can switch
between from the demo control endpoints or the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

DemoScenarioId = Literal["showcase", "fresh", "locked", "admin"]


@dataclass(frozen=True)
class DemoScenario:
    id: DemoScenarioId
    label: str
    description: str


DEFAULT_DEMO_SCENARIO: DemoScenarioId = "showcase"

DEMO_SCENARIOS: list[DemoScenario] = [
    DemoScenario(
        id="showcase",
        label="Showcase",
        description="Open pick window with mixed race states.",
    ),
    DemoScenario(
        id="fresh",
        label="New Player",
        description="No picks yet, clean slate.",
    ),
    DemoScenario(
        id="locked",
        label="Locked Picks",
        description="Qualifying passed, picks locked.",
    ),
    DemoScenario(
        id="admin",
        label="Admin",
        description="Admin user with pending races.",
    ),
]

SCENARIO_IDS: frozenset[str] = frozenset(scenario.id for scenario in DEMO_SCENARIOS)


def is_scenario_id(value: object) -> bool:
    """True if ``value`` names one of the known scenarios."""
    return isinstance(value, str) and value in SCENARIO_IDS


def get_scenario(scenario_id: str) -> DemoScenario:
    """Look up a scenario descriptor by id.

    Raises:
        KeyError: If the id is not a known scenario.
    """
    for scenario in DEMO_SCENARIOS:
        if scenario.id == scenario_id:
            return scenario
    raise KeyError(scenario_id)
