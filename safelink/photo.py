"""
Photo file handling for contact profile pictures.

Provides utilities for:
- Loading a photo from disk for upload
- Validating the image format with Pillow
- Enforcing the upload size limit
"""

import io
import logging
from pathlib import Path

from PIL import Image

from safelink.models.contact import PendingPhoto

# Largest photo the contact service accepts
MAX_PHOTO_SIZE = 10 * 1024 * 1024  # 10MB

# Pillow format name -> MIME type for the accepted formats
ALLOWED_FORMATS = {
    "JPEG": "image/jpeg",
    "GIF": "image/gif",
    "PNG": "image/png",
}

logger = logging.getLogger(__name__)


class PhotoError(Exception):
    """Raised when a photo file cannot be used."""

    pass


def detect_content_type(photo_data: bytes) -> str:
    """
    Identify the image format of photo data.

    Args:
        photo_data: Raw file contents

    Returns:
        MIME type of the image

    Raises:
        PhotoError: If the data is not a JPG, GIF or PNG image
    """
    if not photo_data:
        raise PhotoError("Photo data cannot be empty")

    try:
        with Image.open(io.BytesIO(photo_data)) as image:
            image.verify()
            image_format = image.format
    except Image.UnidentifiedImageError as e:
        logger.error(f"Invalid image format: {e}")
        raise PhotoError("Invalid or unsupported image format") from e
    except (OSError, SyntaxError) as e:
        # Pillow reports truncated or corrupt files this way
        raise PhotoError(f"Corrupt image data: {e}") from e

    if image_format not in ALLOWED_FORMATS:
        raise PhotoError(
            f"Unsupported image format {image_format}. Use JPG, GIF, or PNG."
        )

    return ALLOWED_FORMATS[image_format]


def load_photo(path: Path | str, max_size: int = MAX_PHOTO_SIZE) -> PendingPhoto:
    """
    Read a photo file and prepare it for upload.

    Args:
        path: Path of the image on disk
        max_size: Maximum file size in bytes (default: 10MB)

    Returns:
        PendingPhoto carrying the file name, bytes and MIME type

    Raises:
        PhotoError: If the file is missing, empty, too large or not an image

    Example:
        >>> photo = load_photo("avatar.png")
        >>> photo.content_type
        'image/png'
    """
    path = Path(path)

    try:
        photo_data = path.read_bytes()
    except OSError as e:
        raise PhotoError(f"Cannot read photo file {path}: {e}") from e

    if not photo_data:
        raise PhotoError(f"Photo file is empty: {path}")

    if len(photo_data) > max_size:
        raise PhotoError(
            f"Photo is too large ({len(photo_data)} bytes). "
            f"Max size is {max_size // (1024 * 1024)}MB."
        )

    content_type = detect_content_type(photo_data)
    logger.debug(f"Loaded photo {path.name}: {len(photo_data)} bytes, {content_type}")

    return PendingPhoto(file_name=path.name, data=photo_data, content_type=content_type)
