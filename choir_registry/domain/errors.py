"""Errors raised by member and asset operations."""

from __future__ import annotations


class ChoirRegistryError(Exception):
    """Base class for every error the application raises on purpose."""

    code = "error"


class ValidationError(ChoirRegistryError, ValueError):
    """Submitted data is malformed or was not normalized."""

    code = "validation_error"


class UnsupportedMediaTypeError(ValidationError):
    """An uploaded file is not an image."""

    code = "unsupported_media_type"


class PayloadTooLargeError(ValidationError):
    """An uploaded file exceeds the configured size ceiling."""

    code = "payload_too_large"


class MemberNotFoundError(ChoirRegistryError, LookupError):
    """No member record exists for the requested identifier."""

    code = "not_found"

    def __init__(self, member_id: str) -> None:
        super().__init__("Member not found")
        self.member_id = member_id


class StorageError(ChoirRegistryError, RuntimeError):
    """The database or the asset backend failed; callers may retry."""

    code = "storage_error"


__all__ = [
    "ChoirRegistryError",
    "MemberNotFoundError",
    "PayloadTooLargeError",
    "StorageError",
    "UnsupportedMediaTypeError",
    "ValidationError",
]
