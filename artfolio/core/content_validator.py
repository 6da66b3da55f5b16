"""
Submission checks that run before any vendor call.

Images: extension, size and a PIL integrity pass (catches renamed or
truncated files). Sets PIL.Image.MAX_IMAGE_PIXELS to guard against
decompression bombs.

Text: non-blank and within the configured character limits.
"""

import io
import logging
import os

from PIL import Image, UnidentifiedImageError

from artfolio.config import settings
from artfolio.core.errors import AppError, BadRequestError

Image.MAX_IMAGE_PIXELS = settings.pil_max_image_pixels

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".gif", ".bmp", ".tiff", ".tif"}
_PIL_FORMATS = {"jpeg", "png", "webp", "gif", "bmp", "tiff", "mpo"}


def validate_image_upload(filename: str, content: bytes) -> bool:
    ext = os.path.splitext(filename)[1].lower()
    if ext not in IMAGE_EXTENSIONS:
        raise AppError("Unsupported file format.", status_code=415, code="UNSUPPORTED_MEDIA_TYPE")

    if len(content) > settings.max_image_upload_bytes:
        raise AppError(
            f"Image too large. Max {settings.max_image_upload_mb}MB allowed.",
            status_code=413,
            code="PAYLOAD_TOO_LARGE",
        )
    if not content:
        raise BadRequestError("Empty image upload.")

    try:
        with Image.open(io.BytesIO(content)) as img:
            img.verify()
            actual_format = (img.format or "").lower()
        if actual_format not in _PIL_FORMATS:
            raise ValueError(f"Format mismatch: {actual_format}")
    except (UnidentifiedImageError, ValueError, OSError, Image.DecompressionBombError) as e:
        logger.error(f"Corrupted or disguised upload rejected ({filename}): {e}")
        raise BadRequestError("Invalid file content or format mismatch.")

    return True


def validate_text(text: str) -> str:
    """Returns the text unchanged once it passes the length checks."""
    stripped = text.strip()
    if len(stripped) < max(settings.min_text_chars, 1):
        raise BadRequestError("Text is required.")
    if len(text) > settings.max_text_chars:
        raise BadRequestError(
            f"Text too long. Max {settings.max_text_chars} characters allowed.",
            details={"length": len(text), "max": settings.max_text_chars},
        )
    return text
