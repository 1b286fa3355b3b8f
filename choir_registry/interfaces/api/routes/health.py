"""Liveness check."""

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
def read_health() -> dict[str, object]:
    return {"success": True, "status": "ok"}


__all__ = ["router"]
