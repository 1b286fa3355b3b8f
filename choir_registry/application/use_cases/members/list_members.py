"""Use cases for listing members."""

from sqlalchemy.orm import Session

from choir_registry.domain.entities import Member, Pagination
from choir_registry.domain.entities.pagination import resolve_page_request
from choir_registry.infrastructure.repositories import MemberRepository


def list_members(
    session: Session,
    *,
    page: int | str | None = None,
    limit: int | str | None = None,
) -> tuple[list[Member], Pagination]:
    """Return one page of members, newest first, with its pagination data."""

    page, limit = resolve_page_request(page, limit)
    repository = MemberRepository(session)
    members, total = repository.list(skip=(page - 1) * limit, limit=limit)
    return members, Pagination.compute(page=page, page_size=limit, total=total)


def list_all_members(session: Session) -> list[Member]:
    """Return every member sorted by full name."""

    return MemberRepository(session).list_all()
