"""Naming helpers for attachment blobs."""
import posixpath
from typing import Optional

THUMBNAIL_PREFIX = 'thumbnail-'


def is_image(content_type: Optional[str]) -> bool:
    """Check whether a content type denotes an image."""
    return content_type is not None and 'image' in content_type.lower()


def build_thumbnail_file_name(common_path: str, file_name: str) -> str:
    """Path of the thumbnail stored next to the original file."""
    return posixpath.join(
        common_path,
        posixpath.dirname(file_name),
        THUMBNAIL_PREFIX + posixpath.basename(file_name)
    )
