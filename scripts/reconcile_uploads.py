"""Utility script to delete uploaded photos no member references."""

from __future__ import annotations

import argparse
import logging
from datetime import timedelta

from choir_registry.application.use_cases.assets import reconcile_orphan_assets
from choir_registry.config import get_settings
from choir_registry.domain.errors import StorageError
from choir_registry.infrastructure.database import SessionLocal, initialize_database
from choir_registry.infrastructure.storage import get_asset_store


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the sweep."""

    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Delete stored member photos that no member record references.",
    )
    parser.add_argument(
        "--grace-period",
        type=float,
        default=settings.orphan_grace_period_seconds,
        help=(
            "Keep unreferenced photos modified within this many seconds "
            f"(default: {settings.orphan_grace_period_seconds:g})"
        ),
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every deleted file.",
    )
    return parser.parse_args()


def main() -> None:
    """Run one orphan sweep and print its summary."""

    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    initialize_database()

    session = SessionLocal()
    try:
        report = reconcile_orphan_assets(
            session,
            get_asset_store(),
            grace_period=timedelta(seconds=args.grace_period),
        )
    except StorageError as exc:
        raise SystemExit(f"Could not complete the sweep: {exc}") from exc
    finally:
        session.close()

    print(
        "Orphan sweep finished:\n"
        f"  Scanned: {report.scanned}\n"
        f"  Referenced: {report.referenced}\n"
        f"  Deleted: {len(report.deleted)}\n"
        f"  Kept (recent): {len(report.kept_recent)}\n"
        f"  Failed: {len(report.failed)}"
    )


if __name__ == "__main__":
    main()
