"""Routes listing the zones used to filter members."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from choir_registry.application.use_cases.members import list_zones as list_zones_uc
from choir_registry.domain.errors import ChoirRegistryError
from choir_registry.infrastructure.database import get_db
from choir_registry.interfaces.api.errors import to_http_error
from choir_registry.interfaces.api.schemas import ZonesResponse

router = APIRouter(prefix="/api/zones", tags=["zones"])


@router.get("", response_model=ZonesResponse)
def list_zones(db: Session = Depends(get_db)) -> ZonesResponse:
    """Return the distinct zone names members registered with."""

    try:
        zones = list_zones_uc(db)
    except ChoirRegistryError as exc:
        raise to_http_error(exc) from exc
    return ZonesResponse(zones=zones)


__all__ = ["router"]
