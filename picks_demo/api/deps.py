"""Dependency injection for API routes.

Provides FastAPI dependencies for configuration and the demo API. Both
live on ``app.state``: ``create_app`` puts them there, so two apps in one
process never share a store.

Called by: demo_routes.py via type aliases (ConfigDep, DemoApiDep), main.py
Depends on: config.py, core/registry.py, demo/store.py, demo/api.py
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Request

from picks_demo.config import Settings, get_settings
from picks_demo.core.registry import get_storage
from picks_demo.demo.api import DemoApi
from picks_demo.demo.store import DemoStore

logger = logging.getLogger(__name__)

# ─── Settings ──────────────────────────────────────────────────────────────────


def get_config(request: Request) -> Settings:
    """Return the settings the app was built with (falls back to the singleton)."""
    return getattr(request.app.state, "settings", None) or get_settings()


ConfigDep = Annotated[Settings, Depends(get_config)]

# ─── Demo API ──────────────────────────────────────────────────────────────────


def build_demo_api(settings: Settings) -> DemoApi:
    """Wire storage → store → API for ``settings``."""
    store = DemoStore(storage=get_storage(settings), settings=settings)
    logger.info("Demo API ready (storage=%s)", settings.demo_storage_provider)
    return DemoApi(store=store)


def get_demo_api(request: Request, config: ConfigDep) -> DemoApi:
    """Return the app's DemoApi, building it on first use if the app has none."""
    demo_api = getattr(request.app.state, "demo_api", None)
    if demo_api is None:
        demo_api = build_demo_api(config)
        request.app.state.demo_api = demo_api
    return demo_api


DemoApiDep = Annotated[DemoApi, Depends(get_demo_api)]
