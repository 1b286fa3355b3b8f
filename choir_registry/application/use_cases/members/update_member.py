"""Use case for updating a member and optionally replacing the photo."""

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from choir_registry.application.cleanup import discard_asset
from choir_registry.domain.entities import Member, PhotoUpload
from choir_registry.domain.errors import MemberNotFoundError
from choir_registry.infrastructure.repositories import MemberRepository
from choir_registry.infrastructure.storage import AssetStore

from .normalization import normalize_member_fields


def update_member(
    session: Session,
    asset_store: AssetStore,
    *,
    member_id: str,
    fields: Mapping[str, Any],
    photo: PhotoUpload | None = None,
) -> Member:
    """Apply the submitted fields to ``member_id``.

    The new photo is saved before the record changes and the old one is only
    removed once the record points at the new file.
    """

    repository = MemberRepository(session)
    current = repository.get(member_id)
    if current is None:
        raise MemberNotFoundError(member_id)

    changes = normalize_member_fields(fields, partial=True)

    new_photo = ""
    if photo is not None:
        new_photo = asset_store.save(photo.content, photo.content_type, photo.extension)
        changes["photo"] = new_photo

    try:
        updated = repository.update(member_id, changes)
    except Exception:
        discard_asset(asset_store, new_photo, reason="update_failed")
        raise

    if updated is None:
        # Deleted by a concurrent request after the lookup above.
        discard_asset(asset_store, new_photo, reason="update_failed")
        raise MemberNotFoundError(member_id)

    if new_photo and current.photo and current.photo != new_photo:
        discard_asset(asset_store, current.photo, reason="photo_replaced")

    return updated
