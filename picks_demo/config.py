"""Application settings via pydantic-settings.

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  DEVELOPER QUICK-START: What env vars do I need?
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#
#  DEMO_MODE turns the demo API on:
#
#    DEMO_MODE=true   → Demo routes mounted. Every endpoint answers from the
#                       fabricated dataset of the active scenario.
#    DEMO_MODE=false  → Only /health is mounted.
#
# ─── Demo Storage (second cache tier) ─────────────────────────────────────────
#
#   Provider   DEMO_STORAGE_PROVIDER   Survives restart   Needs
#   ────────   ─────────────────────   ────────────────   ─────
#   memory     memory (default)        no                 nothing
#   redis      redis                   yes                REDIS_URL
#   none       none                    no                 nothing
#
#   Keys are namespaced by DEMO_STORAGE_PREFIX:
#     {prefix}demo_state              → active scenario id
#     {prefix}demo_data_{scenario}    → serialized dataset
#
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration loaded from environment variables.

    Called by: Every module that needs configuration (via ``get_settings()``).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ─── Demo Mode ────────────────────────────────────────────────────────────
    demo_mode: bool = False

    # App
    app_env: str = "development"
    log_level: str = "INFO"
    # Comma-separated CORS origins.
    allowed_origins: str = "http://localhost:3000"

    # ─── Demo Data ────────────────────────────────────────────────────────────
    # Scenario served when nothing (or something unrecognized) is stored.
    demo_default_scenario: str = "showcase"
    #   demo_storage_provider: "memory" | "redis" | "none"
    demo_storage_provider: str = "memory"
    demo_storage_prefix: str = "f1_picks_2026_"

    # Redis (only read when DEMO_STORAGE_PROVIDER=redis)
    redis_url: str = "redis://localhost:6379/0"

    # ─── Computed Properties ──────────────────────────────────────────────────

    @property
    def is_production(self) -> bool:
        """True when app_env is explicitly set to 'production'."""
        return self.app_env == "production"

    @property
    def allowed_origins_list(self) -> list[str]:
        """Return ALLOWED_ORIGINS as a normalized list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def demo_state_key(self) -> str:
        """Storage key holding the active scenario id."""
        return f"{self.demo_storage_prefix}demo_state"

    def demo_data_key(self, scenario: str) -> str:
        """Storage key holding the serialized dataset for ``scenario``."""
        return f"{self.demo_storage_prefix}demo_data_{scenario}"


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()


def is_demo_mode() -> bool:
    """Return True when DEMO_MODE is enabled.

    Reads a fresh ``Settings`` on every call instead of the cached
    singleton, so flipping the env var takes effect on the next query.
    """
    return Settings().demo_mode
