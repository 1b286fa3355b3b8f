"""Use cases for keeping stored photos in line with member records."""

from .reconcile_orphans import ReconciliationReport, reconcile_orphan_assets

__all__ = ["ReconciliationReport", "reconcile_orphan_assets"]
