"""Tests for the Cloudinary image host adapter."""

import cloudinary.api
import cloudinary.exceptions
import cloudinary.uploader
import pytest

from vsg_marketplace.adapters.cloudinary_image_host import CloudinaryImageHost
from vsg_marketplace.errors import ImageHostFailed


@pytest.fixture
def host() -> CloudinaryImageHost:
    return CloudinaryImageHost(
        cloud_name="demo", api_key="key", api_secret="secret"
    )


def test_upload_passes_credentials_and_folder(
    host: CloudinaryImageHost, monkeypatch: pytest.MonkeyPatch
) -> None:
    seen: dict[str, object] = {}

    def fake_upload(file, **options):  # type: ignore[no-untyped-def]
        seen["data"] = file.read()
        seen.update(options)
        return {"public_id": "VSG_Marketplace/abc123", "format": "jpg"}

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)

    result = host.upload(b"blob", filename="a1b2c3d4", folder="VSG_Marketplace")

    assert result.public_id == "VSG_Marketplace/abc123"
    assert result.format == "jpg"
    assert result.error is None
    assert seen["data"] == b"blob"
    assert seen["folder"] == "VSG_Marketplace"
    assert seen["cloud_name"] == "demo"
    assert seen["api_secret"] == "secret"
    assert "public_id" not in seen


def test_upload_overwrite_uses_public_id(
    host: CloudinaryImageHost, monkeypatch: pytest.MonkeyPatch
) -> None:
    seen: dict[str, object] = {}

    def fake_upload(file, **options):  # type: ignore[no-untyped-def]
        seen.update(options)
        return {"public_id": options["public_id"], "format": "png"}

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)

    result = host.upload(
        b"blob", filename="x", public_id="VSG_Marketplace/abc123", overwrite=True
    )

    assert result.format == "png"
    assert seen["overwrite"] is True
    assert "folder" not in seen


def test_upload_error_is_reported_in_result(
    host: CloudinaryImageHost, monkeypatch: pytest.MonkeyPatch
) -> None:
    def fake_upload(file, **options):  # type: ignore[no-untyped-def]
        raise cloudinary.exceptions.BadRequest("Invalid image file")

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)

    result = host.upload(b"blob", filename="x", folder="VSG_Marketplace")

    assert result.public_id is None
    assert result.error == "Invalid image file"


def test_resource_not_found_returns_none(
    host: CloudinaryImageHost, monkeypatch: pytest.MonkeyPatch
) -> None:
    def fake_resource(public_id, **options):  # type: ignore[no-untyped-def]
        if public_id == "VSG_Marketplace/abc123":
            return {"public_id": public_id, "format": "jpg"}
        raise cloudinary.exceptions.NotFound("Resource not found")

    monkeypatch.setattr(cloudinary.api, "resource", fake_resource)

    assert host.resource("VSG_Marketplace/abc123") == {
        "public_id": "VSG_Marketplace/abc123",
        "format": "jpg",
    }
    assert host.resource("VSG_Marketplace/missing") is None


def test_destroy_returns_result_string(
    host: CloudinaryImageHost, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(
        cloudinary.uploader,
        "destroy",
        lambda public_id, **options: {"result": "not found"},
    )

    assert host.destroy("VSG_Marketplace/abc123") == "not found"


def test_host_outages_raise_image_host_failed(
    host: CloudinaryImageHost, monkeypatch: pytest.MonkeyPatch
) -> None:
    def rate_limited(public_id, **options):  # type: ignore[no-untyped-def]
        raise cloudinary.exceptions.RateLimited("Rate limit exceeded")

    monkeypatch.setattr(cloudinary.api, "resource", rate_limited)
    monkeypatch.setattr(cloudinary.uploader, "destroy", rate_limited)

    with pytest.raises(ImageHostFailed, match="Rate limit exceeded"):
        host.resource("VSG_Marketplace/abc123")
    with pytest.raises(ImageHostFailed, match="Rate limit exceeded"):
        host.destroy("VSG_Marketplace/abc123")


def test_build_url_contains_cloud_and_path(host: CloudinaryImageHost) -> None:
    url = host.build_url("VSG_Marketplace/abc123.jpg")

    assert url.startswith("https://res.cloudinary.com/demo/image/upload/")
    assert url.endswith("VSG_Marketplace/abc123.jpg")
