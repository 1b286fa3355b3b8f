"""Route serving stored member photos."""

import mimetypes

from fastapi import APIRouter, Depends, Response, status

from choir_registry.domain.errors import StorageError
from choir_registry.infrastructure.storage import AssetStore
from choir_registry.interfaces.api.dependencies import provide_asset_store
from choir_registry.interfaces.api.errors import ApiError, to_http_error

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.get("/{filename}", response_class=Response)
def read_upload(
    filename: str,
    asset_store: AssetStore = Depends(provide_asset_store),
) -> Response:
    """Return the raw bytes of a stored photo."""

    try:
        content = asset_store.read(filename)
    except FileNotFoundError as exc:
        raise ApiError(status.HTTP_404_NOT_FOUND, "File not found", "not_found") from exc
    except StorageError as exc:
        raise to_http_error(exc) from exc
    media_type, _ = mimetypes.guess_type(filename)
    return Response(
        content=content,
        media_type=media_type or "application/octet-stream",
        headers={"Cache-Control": "public, max-age=86400"},
    )


__all__ = ["router"]
