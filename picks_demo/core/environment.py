"""environment.py: Centralized environment mode manager.

Provides startup validation and an environment snapshot for the health
endpoint and the ``X-Picks-Env`` header.

Mode overview:
    demo      → DEMO_MODE=true. Demo routes mounted, fabricated data.
    disabled  → DEMO_MODE=false. Only /health is served.

Called by: main.py (startup), middleware.py (headers), demo_routes.py
Depends on: config.py (Settings), core/registry.py
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from picks_demo.config import Settings, get_settings
from picks_demo.core.registry import available_storage_providers
from picks_demo.demo.scenarios import SCENARIO_IDS

logger = logging.getLogger(__name__)

MODE_DEMO = "demo"
MODE_DISABLED = "disabled"

VERSION = "0.1.0"


@dataclass(frozen=True)
class EnvironmentInfo:
    """Immutable snapshot of the current environment configuration."""

    mode: str                  # "demo" | "disabled"
    app_env: str               # "development" | "staging" | "production"
    version: str
    storage_provider: str
    default_scenario: str


def mode_for(settings: Settings) -> str:
    return MODE_DEMO if settings.demo_mode else MODE_DISABLED


def get_environment_info(settings: Settings | None = None) -> EnvironmentInfo:
    """Build an EnvironmentInfo snapshot from settings."""
    settings = settings or get_settings()
    return EnvironmentInfo(
        mode=mode_for(settings),
        app_env=settings.app_env,
        version=VERSION,
        storage_provider=settings.demo_storage_provider,
        default_scenario=settings.demo_default_scenario,
    )


def validate_environment(settings: Settings | None = None) -> None:
    """Validate configuration on startup.

    Raises:
        ValueError: If the storage provider or default scenario is unknown.
    """
    settings = settings or get_settings()

    providers = available_storage_providers()
    if settings.demo_storage_provider not in providers:
        raise ValueError(
            f"Invalid DEMO_STORAGE_PROVIDER='{settings.demo_storage_provider}'. "
            f"Must be one of: {providers}"
        )

    if settings.demo_default_scenario not in SCENARIO_IDS:
        raise ValueError(
            f"Invalid DEMO_DEFAULT_SCENARIO='{settings.demo_default_scenario}'. "
            f"Must be one of: {sorted(SCENARIO_IDS)}"
        )

    logger.info(
        "Environment initialized: mode=%s, env=%s, storage=%s",
        mode_for(settings),
        settings.app_env,
        settings.demo_storage_provider,
    )

    if not settings.demo_mode:
        logger.warning("DEMO_MODE is off; only /health is mounted.")
    elif settings.is_production and settings.demo_storage_provider == "memory":
        logger.warning(
            "DEMO_STORAGE_PROVIDER=memory in production; demo edits are lost on restart "
            "and not shared between workers."
        )


def to_dict(info: EnvironmentInfo) -> dict[str, Any]:
    """Serialize EnvironmentInfo to a JSON-safe dict."""
    return {
        "mode": info.mode,
        "app_env": info.app_env,
        "version": info.version,
        "storage_provider": info.storage_provider,
        "default_scenario": info.default_scenario,
    }
