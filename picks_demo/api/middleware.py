"""HTTP middleware for the demo backend.

Outermost first (Starlette wraps the last-registered middleware around
everything else):
    RequestIDMiddleware    → X-Request-ID on the response, bound into structlog context
    LoggingMiddleware      → one ``request_completed`` event per request
    EnvironmentMiddleware  → X-Picks-Env: demo | disabled
    ErrorHandlerMiddleware → uncaught exceptions become a 500 ``{"error": ...}`` body

Called by: main.py (``register_middleware()``)
Depends on: config.py, core/environment.py
"""

from __future__ import annotations

import time
import uuid

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from picks_demo.config import get_settings
from picks_demo.core.environment import mode_for

logger = structlog.get_logger()

INTERNAL_ERROR = "An unexpected error occurred"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag the request with the caller's X-Request-ID, or a fresh UUID."""

    async def dispatch(self, request: Request, call_next):  # noqa: ANN001
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
        response.headers["X-Request-ID"] = request_id
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):  # noqa: ANN001
        start = time.perf_counter()
        response: Response = await call_next(request)
        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return response


class EnvironmentMiddleware(BaseHTTPMiddleware):
    """Add ``X-Picks-Env`` so the frontend can badge demo responses."""

    async def dispatch(self, request: Request, call_next):  # noqa: ANN001
        response = await call_next(request)
        settings = getattr(request.app.state, "settings", None) or get_settings()
        response.headers["X-Picks-Env"] = mode_for(settings)
        return response


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turn anything the routes did not handle into the error envelope.

    The traceback goes to the log; the client only gets ``INTERNAL_ERROR``.
    """

    async def dispatch(self, request: Request, call_next):  # noqa: ANN001
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("unhandled_error", error=str(exc), path=request.url.path)
            return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR})


def register_middleware(app: FastAPI) -> None:
    """Install the middleware stack, innermost first."""
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(EnvironmentMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
