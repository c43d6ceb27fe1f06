"""Cloudinary-backed remote image host."""

import io
import logging
from dataclasses import dataclass
from typing import Any

import cloudinary.api
import cloudinary.exceptions
import cloudinary.uploader
import cloudinary.utils

from vsg_marketplace.domain.images import UploadResult
from vsg_marketplace.errors import ImageHostFailed
from vsg_marketplace.services.images import ImageHost

logger = logging.getLogger(__name__)


@dataclass
class CloudinaryImageHost(ImageHost):
    """Image host using the Cloudinary SDK with per-instance credentials."""

    cloud_name: str
    api_key: str
    api_secret: str
    secure: bool = True

    def _credentials(self) -> dict[str, Any]:
        return {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
        }

    def resource(self, public_id: str) -> dict[str, object] | None:
        """Fetch resource details, returning None when Cloudinary has none."""
        try:
            return dict(
                cloudinary.api.resource(
                    public_id, resource_type="image", **self._credentials()
                )
            )
        except cloudinary.exceptions.NotFound:
            return None
        except cloudinary.exceptions.Error as exc:
            logger.exception("Cloudinary lookup failed", extra={"public_id": public_id})
            raise ImageHostFailed(f"Failed to look up image: {exc}") from exc

    def upload(
        self,
        blob: bytes,
        *,
        filename: str,
        folder: str | None = None,
        public_id: str | None = None,
        overwrite: bool = False,
    ) -> UploadResult:
        """Upload a blob, reporting Cloudinary errors in the result."""
        options: dict[str, Any] = {
            "filename": filename,
            "resource_type": "image",
            "overwrite": overwrite,
            **self._credentials(),
        }
        if folder:
            options["folder"] = folder
        if public_id:
            options["public_id"] = public_id
        try:
            response = cloudinary.uploader.upload(io.BytesIO(blob), **options)
        except cloudinary.exceptions.Error as exc:
            logger.exception("Cloudinary upload failed", extra={"public_id": public_id})
            return UploadResult(public_id=None, format=None, error=str(exc))
        error = response.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            return UploadResult(public_id=None, format=None, error=message)
        return UploadResult(
            public_id=response.get("public_id"),
            format=response.get("format"),
        )

    def destroy(self, public_id: str) -> str:
        """Delete a resource and return Cloudinary's result string."""
        try:
            response = cloudinary.uploader.destroy(
                public_id,
                resource_type="image",
                invalidate=True,
                **self._credentials(),
            )
        except cloudinary.exceptions.Error as exc:
            logger.exception("Cloudinary delete failed", extra={"public_id": public_id})
            raise ImageHostFailed(f"Failed to delete image: {exc}") from exc
        return str(response.get("result"))

    def build_url(self, path: str) -> str:
        """Build a delivery URL for a stored resource path."""
        url, _ = cloudinary.utils.cloudinary_url(
            path, cloud_name=self.cloud_name, secure=self.secure
        )
        return url
