"""Domain entities exposed by the application."""

from .member import (
    EDITABLE_FIELDS,
    SCALAR_TEXT_FIELDS,
    STRING_SET_FIELDS,
    TEXT_FIELD_MAX_LENGTHS,
    Member,
)
from .pagination import Pagination
from .photo_upload import PhotoUpload

__all__ = [
    "EDITABLE_FIELDS",
    "Member",
    "Pagination",
    "PhotoUpload",
    "SCALAR_TEXT_FIELDS",
    "STRING_SET_FIELDS",
    "TEXT_FIELD_MAX_LENGTHS",
]
