"""Upload acceptance rules for identification requests."""

import logging
from pathlib import PurePath

from plant_relay.domain.errors import UploadRejection, UploadValidationError
from plant_relay.domain.identification import UploadedImage

MAX_UPLOAD_BYTES = 10 * 1024 * 1024
DEFAULT_FILENAME = "plant_image.jpg"
TOO_LARGE_MESSAGE = "File is too large. Maximum size: 10MB"

_GENERIC_BINARY_TYPES = {"", "application/octet-stream", "binary/octet-stream"}
_EXTENSION_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".heic": "image/heic",
    ".heif": "image/heif",
}

_logger = logging.getLogger(__name__)


def accept_upload(
    content: bytes | None, content_type: str | None, filename: str | None
) -> UploadedImage:
    """Validate an uploaded file and return it with a usable content type."""
    if content is None or (not content and not filename):
        raise UploadValidationError(
            UploadRejection.MISSING_FILE, "Image file not found in request"
        )
    resolved_type = resolve_content_type(content_type, filename)
    if resolved_type is None:
        raise UploadValidationError(
            UploadRejection.UNSUPPORTED_TYPE, "Only image uploads are allowed"
        )
    if len(content) > MAX_UPLOAD_BYTES:
        raise UploadValidationError(UploadRejection.TOO_LARGE, TOO_LARGE_MESSAGE)
    image = UploadedImage(
        content=content,
        content_type=resolved_type,
        filename=filename or DEFAULT_FILENAME,
    )
    _logger.info(
        "Upload accepted: filename=%s content_type=%s size=%s",
        image.filename,
        image.content_type,
        image.size,
    )
    return image


def resolve_content_type(content_type: str | None, filename: str | None) -> str | None:
    """Return the image content type to forward, or None when not an image.

    Some mobile clients label every upload as a generic binary stream, so those
    are accepted when the filename extension names a known image format.
    """
    declared = (content_type or "").split(";", 1)[0].strip().lower()
    if declared.startswith("image/"):
        return declared
    if declared in _GENERIC_BINARY_TYPES and filename:
        return _EXTENSION_TYPES.get(PurePath(filename).suffix.lower())
    return None
