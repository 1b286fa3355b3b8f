"""Best-effort removal of photo files that no record needs any more.

Failures here never reach the HTTP caller: they are logged and counted, and
the orphan sweep picks the file up later.
"""

from __future__ import annotations

import logging
from collections import Counter

from choir_registry.infrastructure.storage import AssetStore

logger = logging.getLogger(__name__)

cleanup_failures: Counter[str] = Counter()


def discard_asset(asset_store: AssetStore, filename: str, *, reason: str) -> bool:
    """Delete ``filename`` and return whether it succeeded."""

    if not filename:
        return True
    try:
        asset_store.delete(filename)
    except Exception:
        cleanup_failures[reason] += 1
        logger.warning(
            "Could not delete photo %s (%s); leaving it for the orphan sweep",
            filename,
            reason,
            exc_info=True,
        )
        return False
    logger.debug("Deleted photo %s (%s)", filename, reason)
    return True


__all__ = ["cleanup_failures", "discard_asset"]
