"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from choir_registry.config import get_settings
from choir_registry.infrastructure import database
from choir_registry.infrastructure.background import OrphanSweepScheduler
from choir_registry.infrastructure.storage import get_asset_store
from choir_registry.interfaces.api.errors import register_error_handlers
from choir_registry.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and the photo store, run the orphan sweep, release resources."""

    settings = get_settings()
    database.initialize_database()
    get_asset_store()

    scheduler: OrphanSweepScheduler | None = None
    if settings.orphan_sweep_enabled:
        scheduler = OrphanSweepScheduler.from_settings(
            settings,
            session_factory=database.SessionLocal,
            asset_store_factory=get_asset_store,
        )
        scheduler.start()
        logger.info(
            "Orphan photo sweep scheduled in %.0f seconds", settings.orphan_sweep_delay_seconds
        )
    app.state.orphan_sweep = scheduler
    try:
        yield
    finally:
        if scheduler is not None:
            await scheduler.stop()
        database.engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    _configure_logging(settings.log_level)

    app = FastAPI(title="Choir Registry API", version="1.0.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    register_routes(app)
    return app


__all__ = ["create_app", "lifespan"]
