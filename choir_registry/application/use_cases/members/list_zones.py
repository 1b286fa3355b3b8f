"""Use case for listing the zones members belong to."""

from sqlalchemy.orm import Session

from choir_registry.infrastructure.repositories import MemberRepository


def list_zones(session: Session) -> list[str]:
    """Return the distinct non-blank zone names, sorted."""

    return MemberRepository(session).distinct_values("zone")
