"""Tests for the demo scenario CLI (scripts/demo_scenario.py)."""

from __future__ import annotations

import json

import pytest

from picks_demo.api.deps import build_demo_api
from picks_demo.config import Settings
from scripts import demo_scenario


@pytest.fixture
def cli_api(monkeypatch):
    """Point the CLI at one shared in-memory DemoApi."""
    settings = Settings(_env_file=None, demo_mode=True, demo_storage_provider="memory")
    api = build_demo_api(settings)
    monkeypatch.setattr(demo_scenario, "build_demo_api", lambda _settings: api)
    return api


def test_list_marks_active_scenario(cli_api, capsys):
    assert demo_scenario.main(["list"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert len(out) == 4
    assert out[0].startswith("* showcase")
    assert out[1].startswith("  fresh")


def test_use_switches_scenario(cli_api, capsys):
    assert demo_scenario.main(["use", "locked"]) == 0
    assert "Active scenario: locked" in capsys.readouterr().out

    assert demo_scenario.main(["--json", "list"]) == 0
    body = json.loads(capsys.readouterr().out)
    assert body["active"] == "locked"


def test_reset_defaults_to_active_scenario(cli_api, capsys):
    assert demo_scenario.main(["--json", "reset"]) == 0
    assert json.loads(capsys.readouterr().out) == {"reset": "showcase"}

    assert demo_scenario.main(["reset", "--scenario", "admin"]) == 0
    assert "Reset scenario: admin" in capsys.readouterr().out


def test_unknown_scenario_is_rejected_by_parser(cli_api):
    with pytest.raises(SystemExit) as excinfo:
        demo_scenario.main(["use", "bogus"])
    assert excinfo.value.code == 2


def test_warns_when_demo_mode_is_off(cli_api, capsys, monkeypatch):
    monkeypatch.setenv("DEMO_MODE", "false")
    assert demo_scenario.main(["list"]) == 0
    assert "DEMO_MODE is off" in capsys.readouterr().err

    monkeypatch.setenv("DEMO_MODE", "true")
    assert demo_scenario.main(["list"]) == 0
    assert "DEMO_MODE is off" not in capsys.readouterr().err
