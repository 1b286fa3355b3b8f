from fastapi import FastAPI

from .health import router as health_router
from .members import router as members_router
from .uploads import router as uploads_router
from .zones import router as zones_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(health_router)
    app.include_router(members_router)
    app.include_router(zones_router)
    app.include_router(uploads_router)
