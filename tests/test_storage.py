"""Tests for the local photo store."""

import re

import pytest

from choir_registry.domain.errors import (
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from choir_registry.infrastructure.storage import (
    LocalAssetStore,
    generate_asset_filename,
    is_safe_filename,
    normalize_extension,
)


def test_save_writes_file_under_generated_name(asset_store, png_bytes):
    filename = asset_store.save(png_bytes, "image/png", ".PNG")

    assert re.fullmatch(r"\d+-[0-9a-f]{16}\.png", filename)
    assert asset_store.exists(filename)
    assert asset_store.read(filename) == png_bytes
    assert asset_store.list_all() == [filename]


def test_save_ignores_client_supplied_path(asset_store, png_bytes):
    filename = asset_store.save(png_bytes, "image/png", "../../evil.png")

    assert "/" not in filename
    assert (asset_store.directory / filename).is_file()


def test_save_rejects_non_images(asset_store):
    with pytest.raises(UnsupportedMediaTypeError):
        asset_store.save(b"%PDF-1.4", "application/pdf", ".pdf")
    with pytest.raises(UnsupportedMediaTypeError):
        asset_store.save(b"data", None, ".png")
    assert asset_store.list_all() == []


def test_save_rejects_oversized_uploads(tmp_path):
    store = LocalAssetStore(tmp_path, max_bytes=10)

    with pytest.raises(PayloadTooLargeError):
        store.save(b"x" * 11, "image/jpeg", ".jpg")
    assert store.list_all() == []


def test_save_rejects_empty_uploads(asset_store):
    with pytest.raises(ValidationError):
        asset_store.save(b"", "image/png", ".png")


def test_generated_names_are_unique(asset_store, png_bytes):
    names = {asset_store.save(png_bytes, "image/png", ".png") for _ in range(50)}
    assert len(names) == 50


def test_delete_is_idempotent(asset_store, png_bytes):
    filename = asset_store.save(png_bytes, "image/png", ".png")

    asset_store.delete(filename)
    asset_store.delete(filename)
    asset_store.delete("never-existed.png")

    assert not asset_store.exists(filename)


def test_unsafe_names_never_reach_the_filesystem(tmp_path, png_bytes):
    store = LocalAssetStore(tmp_path / "uploads", max_bytes=1024)
    outside = tmp_path / "secret.txt"
    outside.write_text("keep me")

    assert not store.exists("../secret.txt")
    store.delete("../secret.txt")
    with pytest.raises(FileNotFoundError):
        store.read("../secret.txt")
    assert outside.read_text() == "keep me"


def test_last_modified(asset_store, png_bytes):
    filename = asset_store.save(png_bytes, "image/png", ".png")

    assert asset_store.last_modified(filename) is not None
    assert asset_store.last_modified("missing.png") is None


@pytest.mark.parametrize(
    ("extension", "content_type", "expected"),
    [
        (".JPG", "image/jpeg", ".jpg"),
        ("png", "image/png", ".png"),
        ("", "image/png", ".png"),
        (".tar.gz/../x", "image/png", ".png"),
        (None, None, ""),
    ],
)
def test_normalize_extension(extension, content_type, expected):
    assert normalize_extension(extension, content_type) == expected


def test_safe_filename_rules():
    assert is_safe_filename(generate_asset_filename(".png"))
    assert is_safe_filename("1700000000000-photo.jpg")
    assert not is_safe_filename("")
    assert not is_safe_filename(".hidden")
    assert not is_safe_filename("a/b.png")
    assert not is_safe_filename("..")
