"""Resource API — FastAPI application entry point.

Invariants:
    - Resources mounted explicitly through mount_crud / mount_search (no auto-discovery)
    - Global error handlers map ResourceKitError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Storage handle created on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory plus module-level `app`: uvicorn imports `app`,
      tests may build isolated instances
    - All API routes collected on one prefixed router, included once at the end
      so every resource group is registered before the app sees the router
    - Mounted resources listed on app.state.resources for the readiness check
"""

import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from resourcekit.api.error_handlers import register_error_handlers
from resourcekit.api.routes import health
from resourcekit.api.routes.resources import mount_crud, mount_search
from resourcekit.config import Settings, get_settings
from resourcekit.infrastructure.database import close_db, init_db
from resourcekit.infrastructure.observability import setup_logging
from resourcekit.models.seat import Seat
from resourcekit.schemas.seat import SeatRecord
from resourcekit.services.resource_operations import ResourceOperations

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Resource API started")
    yield
    await close_db()
    logger.info("Resource API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Resource API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    api = APIRouter(prefix=settings.api_prefix)
    api.include_router(health.router)
    seats = ResourceOperations(SeatRecord, Seat)
    mount_crud(api, "/seats", seats)
    mount_search(api, "/seats/search", seats)
    app.include_router(api)
    # Read by the readiness check
    app.state.resources = [seats]

    # Static files mounted AFTER API routes so the API prefix takes precedence
    if os.path.isdir(settings.static_dir):
        app.mount(
            "/", StaticFiles(directory=settings.static_dir, html=True),
            name="static",
        )
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "resourcekit.main:app", host=settings.server_host, port=settings.server_port,
    )
