"""FastAPI application factory.

Builds the FastAPI app with middleware, routes, and lifespan events.
Route selection is controlled by DEMO_MODE:
    - true  → /health + the demo API under /api
    - false → /health only

Called by: Uvicorn (``uv run uvicorn picks_demo.main:app``)
Depends on: config.py, environment.py, routes/demo_routes.py, middleware.py
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from picks_demo.api.deps import build_demo_api
from picks_demo.api.middleware import register_middleware
from picks_demo.config import Settings, get_settings
from picks_demo.core.environment import VERSION, mode_for, validate_environment


def configure_logging(settings: Settings) -> None:
    """Configure structlog for console output (JSON in production)."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=log_level, format="%(levelname)s %(name)s: %(message)s")
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if not settings.is_production
            else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Validate configuration on startup and log the active mode."""
    settings: Settings = app.state.settings
    validate_environment(settings)
    logger.info(
        "app_startup",
        env=settings.app_env,
        mode=mode_for(settings),
        storage=settings.demo_storage_provider,
        default_scenario=settings.demo_default_scenario,
    )
    yield
    logger.info("app_shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application.

    Args:
        settings: Explicit settings (tests); defaults to ``get_settings()``.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="F1 Picks Demo",
        description="Demo-data backend for the F1 Picks frontend",
        version=VERSION,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_middleware(app)

    from picks_demo.api.routes.demo_routes import api_router, router

    app.include_router(router)
    if settings.demo_mode:
        app.state.demo_api = build_demo_api(settings)
        app.include_router(api_router)
        logger.info("demo_routes_mounted", scenario_default=settings.demo_default_scenario)

    return app


app = create_app()
