"""Thumbnail upload helpers.

Converts an uploaded image into a ``data:`` URL the dashboard can preview
and send as the post's ``thumbnail`` value.  Pillow is used to confirm the
bytes really are an image and to read the true format, so the MIME type in
the data URL never depends on the client-supplied file name.
"""

from __future__ import annotations

import base64
import io

from PIL import Image, UnidentifiedImageError

from shelterpost.utils.errors import FieldValidationError

_MAX_THUMBNAIL_BYTES = 5 * 1024 * 1024  # 5 MB
_ALLOWED_FORMATS = {"JPEG", "PNG", "GIF", "WEBP"}


def detect_image_format(data: bytes) -> str:
    """Return the Pillow format name (``"PNG"``, ``"JPEG"`` ...) of *data*.

    Raises
    ------
    FieldValidationError
        Keyed on ``thumbnail`` when the bytes are empty, too large, not an
        image, or an image format the dashboard cannot display.
    """
    if not data:
        raise FieldValidationError({"thumbnail": "Thumbnail image is required"})
    if len(data) > _MAX_THUMBNAIL_BYTES:
        raise FieldValidationError({"thumbnail": "Thumbnail image must be 5 MB or smaller"})

    try:
        with Image.open(io.BytesIO(data)) as image:
            image.verify()
            image_format = image.format or ""
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise FieldValidationError({"thumbnail": "Thumbnail must be an image file"}) from exc

    if image_format not in _ALLOWED_FORMATS:
        raise FieldValidationError(
            {"thumbnail": f"Unsupported thumbnail format: {image_format or 'unknown'}"}
        )
    return image_format


def to_data_url(data: bytes) -> str:
    """Encode image bytes as a base64 ``data:`` URL with the detected MIME type."""
    image_format = detect_image_format(data)
    mime_type = Image.MIME.get(image_format, "application/octet-stream")
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
