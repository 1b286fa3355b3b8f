"""Storage backends for uploaded member photos."""

from __future__ import annotations

import logging
import mimetypes
import os
import re
import secrets
import time
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Protocol

from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContainerClient, ContentSettings

from choir_registry.config import Settings, get_settings
from choir_registry.domain.errors import (
    PayloadTooLargeError,
    StorageError,
    UnsupportedMediaTypeError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_SAFE_FILENAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,254}$")
_EXTENSION_PATTERN = re.compile(r"^\.[A-Za-z0-9]{1,10}$")
_BLOB_PREFIX = "uploads/"


class AssetStore(Protocol):
    """Operations the application needs from photo storage."""

    def save(self, content: bytes, content_type: str | None, extension: str | None) -> str:
        ...

    def delete(self, filename: str) -> None:
        ...

    def exists(self, filename: str) -> bool:
        ...

    def list_all(self) -> list[str]:
        ...

    def last_modified(self, filename: str) -> datetime | None:
        ...

    def read(self, filename: str) -> bytes:
        ...


def is_safe_filename(filename: str) -> bool:
    """Return ``True`` when ``filename`` is a single harmless path segment."""

    return bool(filename) and bool(_SAFE_FILENAME.match(filename)) and ".." not in filename


def normalize_extension(extension: str | None, content_type: str | None) -> str:
    """Return a lowercase ``.ext`` suffix, falling back to the MIME type's one."""

    if extension:
        candidate = extension if extension.startswith(".") else f".{extension}"
        if _EXTENSION_PATTERN.match(candidate):
            return candidate.lower()
    if content_type:
        guessed = mimetypes.guess_extension(content_type.split(";", 1)[0].strip())
        if guessed:
            return guessed.lower()
    return ""


def generate_asset_filename(extension: str) -> str:
    """Build a collision-resistant name from the current time and random bits."""

    return f"{time.time_ns() // 1_000_000}-{secrets.token_hex(8)}{extension}"


def validate_upload(content: bytes, content_type: str | None, max_bytes: int) -> None:
    """Reject uploads that are not images or that exceed ``max_bytes``."""

    if not content_type or not content_type.lower().startswith("image/"):
        raise UnsupportedMediaTypeError("Only image files are allowed!")
    if len(content) > max_bytes:
        raise PayloadTooLargeError(
            f"Photo exceeds the maximum allowed size of {max_bytes} bytes"
        )
    if not content:
        raise ValidationError("Uploaded photo is empty")


class LocalAssetStore:
    """Keep photos as plain files inside a single directory."""

    def __init__(self, directory: str | Path, *, max_bytes: int) -> None:
        self.directory = Path(directory)
        self.max_bytes = max_bytes
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, filename: str) -> Path:
        return self.directory / filename

    def save(self, content: bytes, content_type: str | None, extension: str | None) -> str:
        validate_upload(content, content_type, self.max_bytes)
        filename = generate_asset_filename(normalize_extension(extension, content_type))
        path = self.path_for(filename)
        try:
            with path.open("xb") as handle:
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
        except FileExistsError as exc:
            raise RuntimeError(f"Generated photo filename collided: {filename}") from exc
        except OSError as exc:
            path.unlink(missing_ok=True)
            raise StorageError(f"Could not store photo: {exc}") from exc
        logger.debug("Stored photo %s (%d bytes)", filename, len(content))
        return filename

    def delete(self, filename: str) -> None:
        if not is_safe_filename(filename):
            return
        try:
            self.path_for(filename).unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            raise StorageError(f"Could not delete photo {filename}: {exc}") from exc

    def exists(self, filename: str) -> bool:
        return is_safe_filename(filename) and self.path_for(filename).is_file()

    def list_all(self) -> list[str]:
        try:
            return sorted(
                entry.name
                for entry in self.directory.iterdir()
                if entry.is_file() and is_safe_filename(entry.name)
            )
        except OSError as exc:
            raise StorageError(f"Could not list photos: {exc}") from exc

    def last_modified(self, filename: str) -> datetime | None:
        if not is_safe_filename(filename):
            return None
        try:
            stat = self.path_for(filename).stat()
        except OSError:
            return None
        return datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)

    def read(self, filename: str) -> bytes:
        if not is_safe_filename(filename):
            raise FileNotFoundError(filename)
        path = self.path_for(filename)
        if not path.is_file():
            raise FileNotFoundError(filename)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise
        except OSError as exc:
            raise StorageError(f"Could not read photo {filename}: {exc}") from exc


class AzureBlobAssetStore:
    """Keep photos as blobs under ``uploads/`` in an Azure Storage container."""

    def __init__(self, container_client: ContainerClient, *, max_bytes: int) -> None:
        self.container_client = container_client
        self.max_bytes = max_bytes

    @classmethod
    def from_settings(cls, settings: Settings) -> "AzureBlobAssetStore":
        service_client = BlobServiceClient.from_connection_string(
            settings.azure_storage_connection_string
        )
        container_name = settings.azure_storage_container_name
        try:
            service_client.create_container(container_name)
        except ResourceExistsError:
            pass
        return cls(
            service_client.get_container_client(container_name),
            max_bytes=settings.max_upload_bytes,
        )

    @staticmethod
    def _blob_path(filename: str) -> str:
        return f"{_BLOB_PREFIX}{filename}"

    def save(self, content: bytes, content_type: str | None, extension: str | None) -> str:
        validate_upload(content, content_type, self.max_bytes)
        filename = generate_asset_filename(normalize_extension(extension, content_type))
        blob_client = self.container_client.get_blob_client(self._blob_path(filename))
        try:
            blob_client.upload_blob(
                content,
                overwrite=False,
                content_settings=ContentSettings(content_type=content_type),
            )
        except ResourceExistsError as exc:
            raise RuntimeError(f"Generated photo filename collided: {filename}") from exc
        except AzureError as exc:
            raise StorageError(f"Could not store photo: {exc}") from exc
        return filename

    def delete(self, filename: str) -> None:
        if not is_safe_filename(filename):
            return
        blob_client = self.container_client.get_blob_client(self._blob_path(filename))
        try:
            blob_client.delete_blob()
        except ResourceNotFoundError:
            return
        except AzureError as exc:
            raise StorageError(f"Could not delete photo {filename}: {exc}") from exc

    def exists(self, filename: str) -> bool:
        if not is_safe_filename(filename):
            return False
        return self.container_client.get_blob_client(self._blob_path(filename)).exists()

    def list_all(self) -> list[str]:
        names = []
        try:
            for blob in self.container_client.list_blobs(name_starts_with=_BLOB_PREFIX):
                filename = blob.name[len(_BLOB_PREFIX):]
                if is_safe_filename(filename):
                    names.append(filename)
        except AzureError as exc:
            raise StorageError(f"Could not list photos: {exc}") from exc
        return sorted(names)

    def last_modified(self, filename: str) -> datetime | None:
        if not is_safe_filename(filename):
            return None
        blob_client = self.container_client.get_blob_client(self._blob_path(filename))
        try:
            return blob_client.get_blob_properties().last_modified
        except ResourceNotFoundError:
            return None
        except AzureError as exc:
            logger.warning("Could not read properties of photo %s: %s", filename, exc)
            return None

    def read(self, filename: str) -> bytes:
        if not is_safe_filename(filename):
            raise FileNotFoundError(filename)
        blob_client = self.container_client.get_blob_client(self._blob_path(filename))
        try:
            return blob_client.download_blob().readall()
        except ResourceNotFoundError as exc:
            raise FileNotFoundError(filename) from exc


@lru_cache
def get_asset_store() -> AssetStore:
    """Return the asset store selected by ``ASSET_BACKEND``."""

    settings = get_settings()
    if settings.asset_backend == "azure":
        return AzureBlobAssetStore.from_settings(settings)
    return LocalAssetStore(settings.upload_dir, max_bytes=settings.max_upload_bytes)


__all__ = [
    "AssetStore",
    "AzureBlobAssetStore",
    "LocalAssetStore",
    "generate_asset_filename",
    "get_asset_store",
    "is_safe_filename",
    "normalize_extension",
    "validate_upload",
]
