"""Clock readings in the registry's configured timezone."""

from __future__ import annotations

from datetime import datetime
from functools import lru_cache
from zoneinfo import ZoneInfo

from choir_registry.config import get_settings


@lru_cache(maxsize=1)
def _registry_zone() -> ZoneInfo:
    return ZoneInfo(get_settings().app_timezone)


def now_in_app_timezone() -> datetime:
    """Return an aware ``datetime`` for report headers and export filenames."""

    return datetime.now(tz=_registry_zone())


def now_in_app_naive_datetime() -> datetime:
    """Return local wall-clock time for the naive ``DateTime`` member columns."""

    return now_in_app_timezone().replace(tzinfo=None)
