import shutil
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Optional

from logmigration.errors import StorageError
from .base import DataStore, DEFAULT_THUMBNAIL_SIZE


class FilesystemDataStore(DataStore):
    """
    Filesystem-based data store.
    Stores blobs in a local directory, mirroring their relative paths.
    """

    def __init__(self, base_path: str = '.logmigration/data', thumbnail_size=DEFAULT_THUMBNAIL_SIZE):
        """
        Initialize filesystem data store.

        Args:
            base_path: Base directory for storing blobs
            thumbnail_size: (width, height) box for derived thumbnails
        """
        super().__init__(thumbnail_size)
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _make_path(self, file_id: str) -> Path:
        """Resolve a relative blob path inside the base directory."""
        relative = PurePosixPath(file_id)
        if relative.is_absolute() or '..' in relative.parts:
            raise StorageError(f"Invalid blob path: {file_id}")
        return self.base_path.joinpath(*relative.parts)

    def save(self, path: str, stream: BinaryIO) -> str:
        target = self._make_path(path)

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open('wb') as f:
                shutil.copyfileobj(stream, f)
        except OSError as e:
            raise StorageError(f"Failed to write to filesystem: {e}") from e

        return str(PurePosixPath(path))

    def load(self, file_id: str) -> Optional[bytes]:
        path = self._make_path(file_id)

        try:
            if not path.exists():
                return None
            return path.read_bytes()
        except OSError as e:
            raise StorageError(f"Failed to read from filesystem: {e}") from e

    def exists(self, file_id: str) -> bool:
        return self._make_path(file_id).exists()

    def delete(self, file_id: str) -> bool:
        path = self._make_path(file_id)

        if not path.exists():
            return False

        try:
            path.unlink()
            return True
        except OSError as e:
            raise StorageError(f"Failed to delete from filesystem: {e}") from e
