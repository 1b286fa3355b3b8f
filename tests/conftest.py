"""Shared fixtures: a throwaway SQLite database and upload directory."""

from __future__ import annotations

import os
import pathlib
import sys
import tempfile

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

_TEST_ROOT = pathlib.Path(tempfile.mkdtemp(prefix="choir_registry_tests_"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_ROOT / 'test.db'}"
os.environ["UPLOAD_DIR"] = str(_TEST_ROOT / "uploads")
os.environ["ASSET_BACKEND"] = "local"
os.environ["ORPHAN_SWEEP_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["APP_TIMEZONE"] = "Africa/Lagos"

import pytest

from choir_registry.config import reset_settings_cache

reset_settings_cache()

from choir_registry.application.cleanup import cleanup_failures  # noqa: E402
from choir_registry.infrastructure import database
from choir_registry.infrastructure.storage import LocalAssetStore

PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f"
    b"\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)


@pytest.fixture(autouse=True)
def fresh_database():
    """Recreate every table so each test starts from an empty database."""

    from choir_registry.infrastructure import models  # noqa: F401

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.Base.metadata.create_all(bind=database.engine)
    cleanup_failures.clear()
    yield
    cleanup_failures.clear()


@pytest.fixture()
def db_session():
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def asset_store(tmp_path: pathlib.Path) -> LocalAssetStore:
    return LocalAssetStore(tmp_path / "uploads", max_bytes=5 * 1024 * 1024)


@pytest.fixture()
def png_bytes() -> bytes:
    return PNG_BYTES
