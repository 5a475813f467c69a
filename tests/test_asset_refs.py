import re

import pytest

from course_api.errors import RequestFailure
from course_api.services import cloudinary_service
from course_api.services.asset_refs import ExternalUrl, StoredAsset, parse_asset_ref, resolve_asset_url


def test_absolute_urls_are_external():
    assert parse_asset_ref("https://cdn.example.org/logo.png") == ExternalUrl("https://cdn.example.org/logo.png")
    assert parse_asset_ref("http://old-site.ch/photo.jpg") == ExternalUrl("http://old-site.ch/photo.jpg")


def test_other_values_are_stored_paths():
    assert parse_asset_ref("sponsors/abc.png") == StoredAsset("sponsors/abc.png")


@pytest.mark.parametrize("value", [None, "", "   "])
def test_empty_reference_is_none(value):
    assert parse_asset_ref(value) is None
    assert resolve_asset_url(value, cloudinary_service.SPONSOR_LOGOS_BUCKET) is None


def test_external_url_is_returned_verbatim():
    url = "https://cdn.example.org/logo.png"
    assert resolve_asset_url(url, cloudinary_service.SPONSOR_LOGOS_BUCKET) == url


def test_stored_path_resolves_to_public_url():
    url = resolve_asset_url("sponsors/abc.png", cloudinary_service.SPONSOR_LOGOS_BUCKET)
    assert url.startswith("https://")
    assert "sponsor-logos/sponsors/abc.png" in url


def test_generated_path_keeps_extension():
    path = cloudinary_service.generate_asset_path("sponsors", "Logo Final.JPG")
    assert re.fullmatch(r"sponsors/[0-9a-f-]{36}\.jpg", path)


def test_generated_path_defaults_to_png():
    assert cloudinary_service.generate_asset_path("routes", "carte").endswith(".png")
    assert cloudinary_service.generate_asset_path("routes", None).endswith(".png")


def test_upload_sends_public_id_and_format(uploads):
    cloudinary_service.upload(cloudinary_service.ROUTE_MAPS_BUCKET, "routes/abc.gif", b"GIF89a")
    assert uploads[0]["public_id"] == "route-maps/routes/abc"
    assert uploads[0]["format"] == "gif"
    assert uploads[0]["overwrite"] is True


def test_upload_failure_raises_request_failure(monkeypatch):
    def broken_upload(file, **options):
        raise RuntimeError("quota dépassé")

    monkeypatch.setattr(cloudinary_service.cloudinary.uploader, "upload", broken_upload)
    with pytest.raises(RequestFailure):
        cloudinary_service.upload(cloudinary_service.SPONSOR_LOGOS_BUCKET, "sponsors/x.png", b"data")
