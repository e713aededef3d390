"""Study Portfolio API — FastAPI application factory and entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - create_app(settings) owns every piece of mutable state: store, limiters, error log
    - Static assets mounted AFTER API routes so /api/* takes precedence
    - Global error handlers map every failure to the {success: false} envelope

Design Decisions:
    - Factory over module globals: tests build isolated apps against tmp dirs
    - Lifespan over @app.on_event for logging setup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from portfolio import __version__
from portfolio.api.error_handlers import register_error_handlers
from portfolio.api.middleware import RateLimitMiddleware
from portfolio.api.routes import health, recent_posts
from portfolio.api.routes.resources import build_resource_router
from portfolio.config import Settings, get_settings
from portfolio.core.resource_kinds import RESOURCE_KINDS
from portfolio.infrastructure.error_log import ErrorLogWriter
from portfolio.infrastructure.json_store import JsonFileStore
from portfolio.infrastructure.observability import setup_logging
from portfolio.infrastructure.rate_limit import FixedWindowRateLimiter
from portfolio.services.record_service import RecordService

logger = logging.getLogger(__name__)

API_RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."
CREATE_RATE_LIMIT_MESSAGE = "Too many create requests, please try again later."


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    logger.info(
        f"Study Portfolio API started on port {settings.port} "
        f"({settings.environment})",
    )
    yield
    logger.info("Study Portfolio API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build a fully wired application for the given settings."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Study Portfolio API", version=__version__, lifespan=lifespan,
    )
    _init_state(app, settings)

    if settings.rate_limit_enabled:
        app.add_middleware(RateLimitMiddleware, limiter=app.state.api_limiter)
    # Outermost: 429 responses get CORS headers too
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(recent_posts.router)
    for kind in RESOURCE_KINDS:
        app.include_router(build_resource_router(kind))

    if settings.public_dir.is_dir():
        app.mount(
            "/", StaticFiles(directory=settings.public_dir, html=True),
            name="static",
        )

    register_error_handlers(app)
    return app


def _init_state(app: FastAPI, settings: Settings) -> None:
    store = JsonFileStore(settings.data_dir)
    app.state.settings = settings
    app.state.store = store
    app.state.error_log = ErrorLogWriter(settings.logs_dir)
    app.state.record_services = {
        kind.slug: RecordService(kind, store) for kind in RESOURCE_KINDS
    }
    if settings.rate_limit_enabled:
        app.state.api_limiter = FixedWindowRateLimiter(
            "api", settings.api_rate_limit,
            settings.api_rate_window_seconds, API_RATE_LIMIT_MESSAGE,
        )
        app.state.create_limiter = FixedWindowRateLimiter(
            "create", settings.create_rate_limit,
            settings.create_rate_window_seconds, CREATE_RATE_LIMIT_MESSAGE,
        )
    else:
        app.state.api_limiter = None
        app.state.create_limiter = None


app = create_app()
