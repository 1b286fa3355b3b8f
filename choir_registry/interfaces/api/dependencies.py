"""FastAPI dependency utilities."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from fastapi import Depends, Request
from starlette.datastructures import UploadFile

from choir_registry.config import Settings, get_settings
from choir_registry.domain.entities import PhotoUpload
from choir_registry.domain.errors import ValidationError
from choir_registry.infrastructure.storage import AssetStore, get_asset_store
from choir_registry.interfaces.api.errors import to_http_error

PHOTO_FIELD = "photo"


@dataclass
class MemberSubmission:
    """Fields and optional photo received with a create or update request."""

    fields: dict[str, Any] = field(default_factory=dict)
    photo: PhotoUpload | None = None


def provide_asset_store() -> AssetStore:
    """Return the configured photo store."""

    return get_asset_store()


async def _read_photo(upload: UploadFile, max_bytes: int) -> PhotoUpload | None:
    # One byte past the ceiling is enough for the store to reject it.
    content = await upload.read(max_bytes + 1)
    await upload.close()
    if not content and not upload.filename:
        return None
    return PhotoUpload(
        content=content,
        content_type=upload.content_type,
        original_filename=upload.filename,
    )


async def read_member_submission(
    request: Request, settings: Settings = Depends(get_settings)
) -> MemberSubmission:
    """Parse a multipart, url-encoded or JSON member submission.

    Repeated form keys are kept as lists and single ones as plain strings;
    the member use cases normalize both shapes.
    """

    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except json.JSONDecodeError as exc:
            raise to_http_error(ValidationError("Request body is not valid JSON")) from exc
        if not isinstance(payload, dict):
            raise to_http_error(ValidationError("Request body must be a JSON object"))
        return MemberSubmission(fields=payload)

    form = await request.form()
    grouped: dict[str, list[str]] = {}
    photo: PhotoUpload | None = None
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            if key == PHOTO_FIELD and photo is None:
                photo = await _read_photo(value, settings.max_upload_bytes)
            else:
                await value.close()
            continue
        grouped.setdefault(key, []).append(value)

    fields: dict[str, Any] = {
        key: values[0] if len(values) == 1 else values for key, values in grouped.items()
    }
    return MemberSubmission(fields=fields, photo=photo)


__all__ = [
    "MemberSubmission",
    "provide_asset_store",
    "read_member_submission",
]
