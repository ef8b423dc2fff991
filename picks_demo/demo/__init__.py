"""Demo data package for F1 Picks.

Fabricates a complete season of data and serves it through endpoint-shaped
operations, so the frontend can be demonstrated without the real backend,
its database or the results feed. Active when DEMO_MODE=true.

Contents:
    scenarios.py    The named demo scenarios
    fixtures.py     Builds the dataset for one scenario
    factory.py      Fresh objects for write endpoints
    pick_window.py  Pick window open/close rules
    store.py        Scenario-keyed two-tier store
    api.py          Endpoint-shaped operations returning {data}/{error}

Called by: api/routes/demo_routes.py, scripts/demo_scenario.py
"""

from picks_demo.demo.scenarios import DEFAULT_DEMO_SCENARIO, DEMO_SCENARIOS, DemoScenario, DemoScenarioId

__all__ = ["DEFAULT_DEMO_SCENARIO", "DEMO_SCENARIOS", "DemoScenario", "DemoScenarioId"]
