import io
import base64
import binascii
from typing import List

from PIL import Image, UnidentifiedImageError

from app.core.errors import ValidationFailed

# Photos arrive inline as data URLs, e.g. "data:image/png;base64,iVBORw0..."
DATA_URL_PREFIX = "data:image/"


def decode_photo(photo: str, position: int) -> bytes:
    """Decode one inline photo, rejecting anything that is not a base64 image data URL."""
    header, sep, payload = photo.partition(",")
    if not sep or not header.startswith(DATA_URL_PREFIX) or not header.endswith(";base64"):
        raise ValidationFailed(f"File foto ke-{position} bukan gambar.")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationFailed(f"File foto ke-{position} bukan gambar.")


def validate_report_photos(photos: List[str], max_photos: int, max_size_mb: int) -> None:
    """
    Validate the photos attached to a report submission.

    Raises ValidationFailed when there are more than ``max_photos`` photos,
    when a photo decodes to more than ``max_size_mb`` megabytes, or when
    Pillow cannot identify the decoded bytes as an image.
    """
    if len(photos) > max_photos:
        raise ValidationFailed(f"Anda hanya dapat mengunggah maksimal {max_photos} foto.")

    max_bytes = max_size_mb * 1024 * 1024
    for position, photo in enumerate(photos, start=1):
        content = decode_photo(photo, position)
        if len(content) > max_bytes:
            raise ValidationFailed(
                f"Ukuran file foto ke-{position} terlalu besar. Maksimal {max_size_mb} MB."
            )
        try:
            with Image.open(io.BytesIO(content)) as image:
                image.verify()
        except (UnidentifiedImageError, OSError, SyntaxError):
            raise ValidationFailed(f"File foto ke-{position} bukan gambar.")
