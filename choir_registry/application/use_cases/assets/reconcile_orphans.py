"""Sweep that deletes photo files no member record references."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from choir_registry.application.cleanup import discard_asset
from choir_registry.infrastructure.repositories import MemberRepository
from choir_registry.infrastructure.storage import AssetStore

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationReport:
    """Outcome of one orphan sweep."""

    scanned: int = 0
    referenced: int = 0
    deleted: list[str] = field(default_factory=list)
    kept_recent: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def reconcile_orphan_assets(
    session: Session,
    asset_store: AssetStore,
    *,
    grace_period: timedelta = timedelta(0),
    now: datetime | None = None,
) -> ReconciliationReport:
    """Delete stored photos that no member references.

    The store is listed before the references are loaded, so a photo attached
    to a record while the sweep runs is always seen as referenced. A photo
    saved but not yet attached is protected by ``grace_period``: files modified
    within it, or whose age cannot be determined, are left alone.
    """

    current_time = now or datetime.now(tz=timezone.utc)
    stored = asset_store.list_all()
    referenced = MemberRepository(session).referenced_photos()

    report = ReconciliationReport(scanned=len(stored), referenced=len(referenced))
    for filename in stored:
        if filename in referenced:
            continue
        if grace_period > timedelta(0):
            modified = asset_store.last_modified(filename)
            if modified is None or current_time - modified < grace_period:
                report.kept_recent.append(filename)
                continue
        if discard_asset(asset_store, filename, reason="orphan_sweep"):
            report.deleted.append(filename)
        else:
            report.failed.append(filename)

    logger.info(
        "Orphan sweep scanned %d photos: %d deleted, %d kept as recent, %d failed",
        report.scanned,
        len(report.deleted),
        len(report.kept_recent),
        len(report.failed),
    )
    return report
