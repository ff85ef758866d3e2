"""
Wine label images in Supabase Storage.

Files are checked locally before any upload. Uploads are never cleaned up
if the wine save that follows them fails.
"""

import logging
import time
from typing import Optional

from supabase import Client

from cellarbook.config import IMAGE_BUCKET, MAX_IMAGE_SIZE_MB
from cellarbook.error_handling import FormValidationError, backend_call
from cellarbook.utils import sanitize_filename

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = MAX_IMAGE_SIZE_MB * 1024 * 1024


def validate_image(content_type: Optional[str], size: int) -> None:
    """
    Raises:
        FormValidationError: Not an image, or larger than the size limit
    """
    if not content_type or not content_type.startswith("image/"):
        raise FormValidationError("Please select an image file", fields=["image"])
    if size > MAX_IMAGE_BYTES:
        raise FormValidationError(
            f"Image must be smaller than {MAX_IMAGE_SIZE_MB}MB", fields=["image"]
        )


def _extension(filename: str, content_type: str) -> str:
    if "." in filename:
        ext = sanitize_filename(filename.rsplit(".", 1)[-1])
        if ext:
            return ext
    return content_type.split("/")[-1]


def image_key(filename: str, content_type: str, now_ms: Optional[int] = None) -> str:
    """Storage key `wine-<epoch ms>.<ext>`."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"wine-{now_ms}.{_extension(filename, content_type)}"


def upload_wine_image(sb: Client, filename: str, data: bytes, content_type: str) -> str:
    """Upload an image and return its public URL."""
    validate_image(content_type, len(data))
    key = image_key(filename, content_type)

    with backend_call("upload image"):
        sb.storage.from_(IMAGE_BUCKET).upload(key, data, {"content-type": content_type})
        public_url = sb.storage.from_(IMAGE_BUCKET).get_public_url(key)

    logger.info(f"Uploaded wine image {key}")
    return public_url
