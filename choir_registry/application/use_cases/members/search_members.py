"""Use case for searching members by name, phone, parish, zone or area."""

from sqlalchemy.orm import Session

from choir_registry.domain.entities import Member
from choir_registry.infrastructure.repositories import MemberRepository

SEARCH_RESULT_LIMIT = 50


def search_members(session: Session, term: str | None, *, limit: int | None = None) -> list[Member]:
    """Return members matching ``term``; an empty term matches nothing."""

    if term is None or not term.strip():
        return []
    return MemberRepository(session).search(term, limit=limit)
