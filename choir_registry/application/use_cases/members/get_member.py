"""Use case for retrieving a single member."""

from sqlalchemy.orm import Session

from choir_registry.domain.entities import Member
from choir_registry.domain.errors import MemberNotFoundError
from choir_registry.infrastructure.repositories import MemberRepository


def get_member(session: Session, member_id: str) -> Member:
    """Return the member identified by ``member_id`` or raise an error."""

    member = MemberRepository(session).get(member_id)
    if member is None:
        raise MemberNotFoundError(member_id)
    return member
