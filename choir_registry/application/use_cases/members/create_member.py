"""Use case for registering a new member."""

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from choir_registry.application.cleanup import discard_asset
from choir_registry.domain.entities import Member, PhotoUpload
from choir_registry.infrastructure.repositories import MemberRepository
from choir_registry.infrastructure.storage import AssetStore

from .normalization import normalize_member_fields


def create_member(
    session: Session,
    asset_store: AssetStore,
    *,
    fields: Mapping[str, Any],
    photo: PhotoUpload | None = None,
) -> Member:
    """Store the photo (if any) and then the record that references it.

    A failed photo save aborts before the database is touched. A failed insert
    removes the photo that was just saved before the error is re-raised.
    """

    values = normalize_member_fields(fields, partial=False)

    photo_filename = ""
    if photo is not None:
        photo_filename = asset_store.save(
            photo.content, photo.content_type, photo.extension
        )

    repository = MemberRepository(session)
    try:
        return repository.create(values, photo=photo_filename)
    except Exception:
        discard_asset(asset_store, photo_filename, reason="create_failed")
        raise
