"""Tests for the environment manager (core/environment.py).

Validates mode detection, startup validation, and the environment
snapshot served by /health.

Run with: uv run pytest tests/unit/test_environment.py -v
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from picks_demo.config import Settings
from picks_demo.core.environment import (
    MODE_DEMO,
    MODE_DISABLED,
    VERSION,
    EnvironmentInfo,
    get_environment_info,
    mode_for,
    to_dict,
    validate_environment,
)


class TestEnvironmentInfo:
    """Tests for the EnvironmentInfo dataclass and get_environment_info()."""

    def test_mode_follows_demo_flag(self):
        assert mode_for(Settings(_env_file=None, demo_mode=True)) == MODE_DEMO
        assert mode_for(Settings(_env_file=None, demo_mode=False)) == MODE_DISABLED

    def test_get_environment_info_from_explicit_settings(self):
        settings = Settings(
            _env_file=None,
            demo_mode=True,
            app_env="staging",
            demo_storage_provider="redis",
            demo_default_scenario="admin",
        )

        info = get_environment_info(settings)

        assert info == EnvironmentInfo(
            mode="demo",
            app_env="staging",
            version=VERSION,
            storage_provider="redis",
            default_scenario="admin",
        )

    @patch("picks_demo.core.environment.get_settings")
    def test_get_environment_info_defaults_to_cached_settings(self, mock_settings):
        mock_settings.return_value = Settings(_env_file=None, demo_mode=False)

        info = get_environment_info()

        assert info.mode == "disabled"
        mock_settings.assert_called_once()

    def test_environment_info_is_frozen(self):
        info = get_environment_info(Settings(_env_file=None))
        with pytest.raises(AttributeError):
            info.mode = "demo"  # type: ignore[misc]

    def test_to_dict(self):
        info = get_environment_info(Settings(_env_file=None, demo_mode=True))
        assert to_dict(info) == {
            "mode": "demo",
            "app_env": "development",
            "version": VERSION,
            "storage_provider": "memory",
            "default_scenario": "showcase",
        }


class TestValidateEnvironment:
    """Tests for validate_environment() startup checks."""

    def test_valid_demo_configuration_passes(self):
        validate_environment(Settings(_env_file=None, demo_mode=True))

    def test_unknown_storage_provider_raises(self):
        settings = Settings(_env_file=None, demo_storage_provider="sqlite")
        with pytest.raises(ValueError, match="Invalid DEMO_STORAGE_PROVIDER"):
            validate_environment(settings)

    def test_unknown_default_scenario_raises(self):
        settings = Settings(_env_file=None, demo_default_scenario="bogus")
        with pytest.raises(ValueError, match="Invalid DEMO_DEFAULT_SCENARIO"):
            validate_environment(settings)

    def test_disabled_mode_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="picks_demo.core.environment"):
            validate_environment(Settings(_env_file=None, demo_mode=False))
        assert "DEMO_MODE is off" in caplog.text

    def test_memory_storage_in_production_warns(self, caplog):
        settings = Settings(_env_file=None, demo_mode=True, app_env="production")
        with caplog.at_level(logging.WARNING, logger="picks_demo.core.environment"):
            validate_environment(settings)
        assert "DEMO_STORAGE_PROVIDER=memory in production" in caplog.text
