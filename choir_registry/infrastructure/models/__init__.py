"""ORM models used by the application infrastructure."""

from .member import MemberModel

__all__ = ["MemberModel"]
