"""Image lifecycle across the remote image host and local metadata."""

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from vsg_marketplace.domain.images import ImageRecord, UploadResult
from vsg_marketplace.errors import (
    MarketplaceError,
    NotFound,
    StoreWriteFailed,
    UploadFailed,
)

logger = logging.getLogger(__name__)

DEFAULT_FOLDER = "VSG_Marketplace"
NOT_FOUND_RESULT = "not found"


class ImageHost(Protocol):
    """Interface for the remote image host."""

    def resource(self, public_id: str) -> dict[str, object] | None:
        """Return the resource stored at public_id, or None when absent."""

    def upload(
        self,
        blob: bytes,
        *,
        filename: str,
        folder: str | None = None,
        public_id: str | None = None,
        overwrite: bool = False,
    ) -> UploadResult:
        """Store a blob and report the assigned public id and format."""

    def destroy(self, public_id: str) -> str:
        """Delete a resource and return the host's result string."""

    def build_url(self, path: str) -> str:
        """Build a servable URL for a stored resource path."""


class ImageRepository(Protocol):
    """Persistence interface for image metadata."""

    def create_image(self, record: ImageRecord) -> None:
        """Persist a new image record."""

    def get_extension(self, image_id: str) -> str | None:
        """Return the stored extension for an image."""

    def update_extension(self, image_id: str, extension: str) -> None:
        """Replace the stored extension of an image."""

    def delete_image(self, image_id: str) -> None:
        """Delete an image record."""

    def get_image_by_item_code(self, item_code: int) -> ImageRecord | None:
        """Return the image associated with an item, if any."""


def generate_filename() -> str:
    """Return a short random filename token."""
    return secrets.token_hex(4)


def normalize_public_id(public_id: str) -> str:
    """Undo a single level of route escaping of path separators."""
    return public_id.replace("%2F", "/")


def split_public_id(public_id: str) -> str:
    """Return the record id component of a `<folder>/<id>` public id.

    The folder prefix must not contain a path separator.
    """
    parts = public_id.split("/")
    if len(parts) != 2 or not all(parts):  # noqa: PLR2004
        raise ValueError(f"Public id must look like '<folder>/<id>': {public_id!r}")
    return parts[1]


@dataclass
class ImageService:
    """Keeps remote image blobs and local image records in sync."""

    host: ImageHost
    repository: ImageRepository
    folder: str = DEFAULT_FOLDER
    filename_factory: Callable[[], str] = field(default=generate_filename)

    def __post_init__(self) -> None:
        if "/" in self.folder:
            raise ValueError("Image folder must not contain '/'")

    def public_id_for(self, image_id: str) -> str:
        """Build the host public id for a record id."""
        return f"{self.folder}/{image_id}"

    def exists(self, public_id: str) -> bool:
        """Return true when the host holds a resource with exactly this id."""
        resource = self.host.resource(public_id)
        return resource is not None and resource.get("public_id") == public_id

    def upload(self, file_bytes: bytes, item_code: int | None = None) -> str:
        """Upload a new image and persist its record, returning the record id."""
        result = self.host.upload(
            file_bytes,
            filename=self.filename_factory(),
            folder=self.folder,
        )
        if result.error is not None or not result.public_id:
            raise UploadFailed(f"Failed to upload file: {result.error}")

        try:
            image_id = split_public_id(result.public_id)
        except ValueError as exc:
            error = UploadFailed(f"Host returned an unusable public id: {exc}")
            self._compensate(result.public_id, error)
            raise error from exc

        record = ImageRecord(id=image_id, extension=result.format, item_code=item_code)
        try:
            self.repository.create_image(record)
        except StoreWriteFailed as exc:
            self._compensate(result.public_id, exc)
            raise
        except Exception as exc:
            error = StoreWriteFailed(f"Failed to create image metadata: {exc}")
            self._compensate(result.public_id, error)
            raise error from exc
        logger.info("Uploaded image", extra={"public_id": result.public_id})
        return image_id

    def update(self, public_id: str, file_bytes: bytes) -> None:
        """Overwrite an existing image and refresh its stored extension."""
        public_id = normalize_public_id(public_id)
        image_id = split_public_id(public_id)
        if not self.exists(public_id):
            raise NotFound("Image not found!")

        result = self.host.upload(
            file_bytes,
            filename=self.filename_factory(),
            public_id=public_id,
            overwrite=True,
        )
        if result.error is not None:
            raise UploadFailed(f"Failed to update file: {result.error}")

        if result.format and self.repository.get_extension(image_id) != result.format:
            self.repository.update_extension(image_id, result.format)

    def delete(self, public_id: str) -> None:
        """Delete an image from the host, then its local record."""
        public_id = normalize_public_id(public_id)
        image_id = split_public_id(public_id)
        if self.host.destroy(public_id) == NOT_FOUND_RESULT:
            raise NotFound("Image not found!")
        self.repository.delete_image(image_id)

    def get_url_by_item_code(self, item_code: int) -> str | None:
        """Return the servable URL of an item's image, if it has one."""
        image = self.repository.get_image_by_item_code(item_code)
        if image is None:
            return None
        if image.extension is None:
            raise NotFound("Image not found!")
        return self.host.build_url(f"{self.folder}/{image.id}.{image.extension}")

    def _compensate(self, public_id: str, cause: MarketplaceError) -> None:
        """Delete a freshly uploaded blob once, recording any cleanup failure."""
        logger.warning(
            "Upload could not be recorded, removing uploaded blob",
            extra={"public_id": public_id, "kind": cause.kind},
        )
        try:
            self.host.destroy(public_id)
        except Exception as cleanup_error:
            logger.exception(
                "Compensating image delete failed",
                extra={"public_id": public_id},
            )
            cause.compensation_error = cleanup_error
            cause.add_note(f"Compensating delete of {public_id} failed: {cleanup_error}")
