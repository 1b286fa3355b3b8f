"""Tests for the orphan photo sweep."""

import os
import time
from datetime import datetime, timedelta, timezone

from choir_registry.application.use_cases.assets import reconcile_orphan_assets
from choir_registry.application.use_cases.members import create_member
from choir_registry.domain.entities import PhotoUpload
from choir_registry.domain.errors import StorageError
from choir_registry.infrastructure.storage import LocalAssetStore


def _age_file(store: LocalAssetStore, filename: str, seconds: float) -> None:
    past = time.time() - seconds
    os.utime(store.path_for(filename), (past, past))


def _register(db_session, store, content: bytes):
    return create_member(
        db_session,
        store,
        fields={"fullName": "Ngozi Eze", "zone": "Enugu"},
        photo=PhotoUpload(content=content, content_type="image/png", original_filename="n.png"),
    )


def test_sweep_never_deletes_referenced_photos(db_session, asset_store, png_bytes):
    members = [_register(db_session, asset_store, png_bytes + bytes([i])) for i in range(3)]
    orphan = asset_store.save(png_bytes, "image/png", ".png")

    report = reconcile_orphan_assets(db_session, asset_store)

    assert report.deleted == [orphan]
    assert report.scanned == 4
    assert report.referenced == 3
    for member in members:
        assert asset_store.exists(member.photo)
    assert not asset_store.exists(orphan)


def test_sweep_is_idempotent(db_session, asset_store, png_bytes):
    member = _register(db_session, asset_store, png_bytes)
    asset_store.save(png_bytes, "image/png", ".png")

    reconcile_orphan_assets(db_session, asset_store)
    second = reconcile_orphan_assets(db_session, asset_store)

    assert second.deleted == []
    assert asset_store.list_all() == [member.photo]


def test_grace_period_protects_fresh_uploads(db_session, asset_store, png_bytes):
    fresh = asset_store.save(png_bytes, "image/png", ".png")
    stale = asset_store.save(png_bytes, "image/png", ".png")
    _age_file(asset_store, stale, seconds=3600)

    report = reconcile_orphan_assets(
        db_session, asset_store, grace_period=timedelta(minutes=5)
    )

    assert report.deleted == [stale]
    assert report.kept_recent == [fresh]
    assert asset_store.exists(fresh)


def test_grace_period_uses_supplied_clock(db_session, asset_store, png_bytes):
    filename = asset_store.save(png_bytes, "image/png", ".png")
    later = datetime.now(tz=timezone.utc) + timedelta(hours=1)

    report = reconcile_orphan_assets(
        db_session, asset_store, grace_period=timedelta(minutes=5), now=later
    )

    assert report.deleted == [filename]


def test_delete_failures_are_reported_not_raised(db_session, tmp_path, png_bytes):
    class StubbornStore(LocalAssetStore):
        def delete(self, filename):
            raise StorageError("permission denied")

    store = StubbornStore(tmp_path / "uploads", max_bytes=1024 * 1024)
    orphan = store.save(png_bytes, "image/png", ".png")

    report = reconcile_orphan_assets(db_session, store)

    assert report.failed == [orphan]
    assert report.deleted == []
    assert store.exists(orphan)
