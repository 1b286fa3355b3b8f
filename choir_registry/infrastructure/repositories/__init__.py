"""Repository implementations for infrastructure layer."""

from .member_repository import SEARCHABLE_FIELDS, MemberRepository

__all__ = ["MemberRepository", "SEARCHABLE_FIELDS"]
