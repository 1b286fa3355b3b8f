"""Use cases for managing choir members."""

from .create_member import create_member
from .delete_member import delete_member
from .get_member import get_member
from .list_members import list_all_members, list_members
from .list_zones import list_zones
from .normalization import normalize_member_fields, normalize_string_set
from .search_members import SEARCH_RESULT_LIMIT, search_members
from .update_member import update_member

__all__ = [
    "SEARCH_RESULT_LIMIT",
    "create_member",
    "delete_member",
    "get_member",
    "list_all_members",
    "list_members",
    "list_zones",
    "normalize_member_fields",
    "normalize_string_set",
    "search_members",
    "update_member",
]
