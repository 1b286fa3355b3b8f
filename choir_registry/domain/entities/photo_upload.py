"""Domain value describing a photo received with a member submission."""

from dataclasses import dataclass
from pathlib import PurePath


@dataclass(frozen=True)
class PhotoUpload:
    """Raw bytes of an uploaded photo plus what the client declared about it."""

    content: bytes
    content_type: str | None
    original_filename: str | None = None

    @property
    def extension(self) -> str:
        """Suffix of the client's filename; only used as a hint for the stored name."""

        if not self.original_filename:
            return ""
        return PurePath(self.original_filename.replace("\\", "/")).suffix


__all__ = ["PhotoUpload"]
