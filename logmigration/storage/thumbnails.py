"""Thumbnail derivation for image attachments."""
import io
from typing import Tuple

from PIL import Image

from logmigration.errors import StorageError

# Formats Pillow can both read and write; anything else is re-encoded as PNG
_WRITABLE_FORMATS = {'PNG', 'JPEG', 'GIF', 'BMP', 'WEBP', 'TIFF'}


def create_thumbnail(data: bytes, size: Tuple[int, int]) -> bytes:
    """
    Scale an image down to fit in a box, keeping its aspect ratio.

    Args:
        data: Encoded image bytes
        size: (width, height) of the bounding box

    Returns:
        Encoded thumbnail bytes, in the source format when possible

    Raises:
        StorageError: If the data is not a readable image
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            image_format = image.format if image.format in _WRITABLE_FORMATS else 'PNG'
            image.thumbnail(size)
            if image_format == 'JPEG' and image.mode not in ('RGB', 'L'):
                image = image.convert('RGB')
            output = io.BytesIO()
            image.save(output, format=image_format)
    except (OSError, Image.DecompressionBombError) as e:
        raise StorageError(f"Failed to create thumbnail: {e}") from e

    return output.getvalue()
