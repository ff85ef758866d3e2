"""
Tests for wine image validation and upload.
"""

import pytest

from cellarbook.error_handling import BackendError, FormValidationError
from cellarbook.images import MAX_IMAGE_BYTES, image_key, upload_wine_image, validate_image


class TestValidation:
    """Test image checks before upload."""

    def test_oversized_file_rejected_before_upload(self, sb):
        """Files over 5MB never reach storage."""
        with pytest.raises(FormValidationError) as exc_info:
            upload_wine_image(sb, "label.jpg", b"x" * (6 * 1024 * 1024), "image/jpeg")
        assert "5MB" in str(exc_info.value)
        assert sb.calls == []

    def test_non_image_rejected_before_upload(self, sb):
        """Non-image types never reach storage."""
        with pytest.raises(FormValidationError):
            upload_wine_image(sb, "notes.txt", b"hello", "text/plain")
        assert sb.calls == []

    def test_exact_limit_accepted(self):
        """A file of exactly the limit is allowed."""
        validate_image("image/png", MAX_IMAGE_BYTES)

    def test_missing_content_type(self):
        """A file without a content type is rejected."""
        with pytest.raises(FormValidationError):
            validate_image(None, 10)


class TestKeys:
    """Test storage key naming."""

    def test_key_uses_timestamp_and_extension(self):
        """Keys are built from the timestamp and the lowercased extension."""
        assert image_key("My Label.JPG", "image/jpeg", now_ms=1700000000000) == "wine-1700000000000.jpg"

    def test_extension_from_content_type_when_missing(self):
        """The content type supplies a missing extension."""
        assert image_key("label", "image/webp", now_ms=5) == "wine-5.webp"


class TestUpload:
    """Test uploading to the wine-images bucket."""

    def test_upload_returns_public_url(self, sb):
        """The upload returns the object's public URL."""
        url = upload_wine_image(sb, "label.png", b"\x89PNG", "image/png")
        (bucket, key), (data, options) = next(iter(sb.objects.items()))
        assert bucket == "wine-images"
        assert key.startswith("wine-") and key.endswith(".png")
        assert options == {"content-type": "image/png"}
        assert url.endswith(f"/wine-images/{key}")

    def test_storage_failure_is_generic(self, sb):
        """Storage errors become a generic message."""
        sb.fail_on("storage", "upload")
        with pytest.raises(BackendError) as exc_info:
            upload_wine_image(sb, "label.png", b"\x89PNG", "image/png")
        assert str(exc_info.value) == "Failed to upload image"
