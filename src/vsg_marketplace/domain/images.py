"""Domain models for item images."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ImageRecord:
    """Local metadata for an image stored at the remote host."""

    id: str
    extension: str | None
    item_code: int | None = None


@dataclass(frozen=True)
class UploadResult:
    """Outcome reported by the remote image host for an upload."""

    public_id: str | None
    format: str | None
    error: str | None = None
