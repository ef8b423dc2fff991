"""CLI for inspecting and switching demo scenarios in the configured storage.

Examples:
    uv run python scripts/demo_scenario.py list
    uv run python scripts/demo_scenario.py use locked
    uv run python scripts/demo_scenario.py reset --scenario fresh

Only meaningful with a shared storage backend (DEMO_STORAGE_PROVIDER=redis);
with the in-memory backend changes vanish when the script exits.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Sequence

from picks_demo.api.deps import build_demo_api
from picks_demo.config import get_settings, is_demo_mode
from picks_demo.demo.scenarios import SCENARIO_IDS


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage F1 Picks demo scenarios.")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON instead of human-readable text.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List scenarios and show the active one.")

    use = sub.add_parser("use", help="Make a scenario active.")
    use.add_argument("scenario", choices=sorted(SCENARIO_IDS))

    reset = sub.add_parser("reset", help="Discard stored edits for a scenario.")
    reset.add_argument(
        "--scenario",
        choices=sorted(SCENARIO_IDS),
        default=None,
        help="Scenario to reset (default: the active one).",
    )
    return parser


def _render_text(command: str, data: dict) -> str:
    if command == "list":
        lines = []
        for scenario in data["scenarios"]:
            marker = "*" if scenario["id"] == data["active"] else " "
            lines.append(f"{marker} {scenario['id']:<10} {scenario['label']:<14} {scenario['description']}")
        return "\n".join(lines)
    if command == "use":
        return f"Active scenario: {data['active']}"
    return f"Reset scenario: {data['reset']}"


async def _run(args: argparse.Namespace) -> int:
    if not is_demo_mode():
        print("Note: DEMO_MODE is off; the backend will not serve these scenarios.", file=sys.stderr)

    demo = build_demo_api(get_settings())

    if args.command == "list":
        response = await demo.list_scenarios()
    elif args.command == "use":
        response = await demo.switch_scenario(args.scenario)
    else:
        response = await demo.reset_scenario(args.scenario)

    if not response.ok:
        print(f"Error: {response.error}")
        return 1

    body = response.to_body()["data"]
    print(json.dumps(body, indent=2) if args.json else _render_text(args.command, body))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
