"""Use case for deleting a member and its photo."""

from sqlalchemy.orm import Session

from choir_registry.application.cleanup import discard_asset
from choir_registry.domain.entities import Member
from choir_registry.domain.errors import MemberNotFoundError
from choir_registry.infrastructure.repositories import MemberRepository
from choir_registry.infrastructure.storage import AssetStore


def delete_member(session: Session, asset_store: AssetStore, member_id: str) -> Member:
    """Delete the record first, then its photo on a best-effort basis."""

    repository = MemberRepository(session)
    member = repository.get(member_id)
    if member is None:
        raise MemberNotFoundError(member_id)

    if not repository.delete(member_id):
        raise MemberNotFoundError(member_id)

    if member.photo:
        discard_asset(asset_store, member.photo, reason="member_deleted")
    return member
