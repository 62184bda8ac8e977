import io
from abc import ABC, abstractmethod
from typing import BinaryIO, Optional, Tuple

from .thumbnails import create_thumbnail

DEFAULT_THUMBNAIL_SIZE = (80, 60)


class DataStore(ABC):
    """
    Abstract base class for blob data stores.
    Blobs are addressed by a relative, slash-separated path chosen by the caller.
    """

    def __init__(self, thumbnail_size: Tuple[int, int] = DEFAULT_THUMBNAIL_SIZE):
        self.thumbnail_size = thumbnail_size

    @abstractmethod
    def save(self, path: str, stream: BinaryIO) -> str:
        """
        Store the stream content under a path.

        Args:
            path: Relative target path (e.g. '12/ab/cd/ef/rest/screen.png')
            stream: Binary stream with the content

        Returns:
            Identifier of the stored blob

        Raises:
            StorageError: If the content could not be written
        """
        pass

    @abstractmethod
    def load(self, file_id: str) -> Optional[bytes]:
        """
        Retrieve blob content.

        Args:
            file_id: Identifier returned by save

        Returns:
            Binary content or None if not found
        """
        pass

    @abstractmethod
    def exists(self, file_id: str) -> bool:
        """
        Check if a blob exists.

        Args:
            file_id: Identifier returned by save

        Returns:
            True if exists, False otherwise
        """
        pass

    @abstractmethod
    def delete(self, file_id: str) -> bool:
        """
        Delete a blob.

        Args:
            file_id: Identifier returned by save

        Returns:
            True if deleted, False if not found
        """
        pass

    def save_thumbnail(self, path: str, stream: BinaryIO) -> str:
        """
        Derive a thumbnail from an image stream and store it under a path.

        Args:
            path: Relative target path of the thumbnail
            stream: Binary stream with the original image

        Returns:
            Identifier of the stored thumbnail

        Raises:
            StorageError: If the image could not be decoded or the thumbnail not written
        """
        thumbnail = create_thumbnail(stream.read(), self.thumbnail_size)
        return self.save(path, io.BytesIO(thumbnail))
