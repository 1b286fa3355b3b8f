"""Value object describing one page of a listing."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class Pagination:
    """Page position and navigation flags for a paginated member listing."""

    current_page: int
    page_size: int
    total_pages: int
    total_members: int
    has_next: bool
    has_prev: bool

    @classmethod
    def compute(cls, *, page: int, page_size: int, total: int) -> "Pagination":
        """Derive the navigation flags for ``page`` out of ``total`` items."""

        total_pages = math.ceil(total / page_size) if page_size > 0 else 0
        return cls(
            current_page=page,
            page_size=page_size,
            total_pages=total_pages,
            total_members=total,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


def _leading_integer(value: int | str | None) -> int | None:
    if value is None or isinstance(value, int):
        return value
    match = _LEADING_INTEGER.match(value)
    return int(match.group(1)) if match else None


def resolve_page_request(
    page: int | str | None, limit: int | str | None
) -> tuple[int, int]:
    """Apply the listing defaults to missing, unparsable or non-positive values.

    Query strings are read up to their first non-digit, so ``"2abc"`` is page
    2 and ``"two"`` falls back to the default.
    """

    page_number = _leading_integer(page)
    page_size = _leading_integer(limit)
    resolved_page = page_number if page_number is not None and page_number > 0 else DEFAULT_PAGE
    resolved_limit = page_size if page_size is not None and page_size > 0 else DEFAULT_PAGE_SIZE
    return resolved_page, resolved_limit


__all__ = ["DEFAULT_PAGE", "DEFAULT_PAGE_SIZE", "Pagination", "resolve_page_request"]
