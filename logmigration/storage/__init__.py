from logmigration.config import Config
from .base import DataStore
from .filesystem import FilesystemDataStore
from .s3 import S3DataStore
from .paths import FilePathGenerator
from .utils import is_image, build_thumbnail_file_name

__all__ = ['DataStore', 'FilesystemDataStore', 'S3DataStore', 'FilePathGenerator',
           'is_image', 'build_thumbnail_file_name', 'create_data_store']


def create_data_store(config=Config) -> DataStore:
    """
    Build the data store selected by DATASTORE_TYPE.

    Args:
        config: Configuration object (defaults to the environment-backed Config)

    Returns:
        Configured DataStore
    """
    thumbnail_size = (config.THUMBNAIL_WIDTH, config.THUMBNAIL_HEIGHT)
    if config.DATASTORE_TYPE == 's3':
        return S3DataStore(bucket=config.S3_BUCKET, thumbnail_size=thumbnail_size)
    if config.DATASTORE_TYPE == 'filesystem':
        return FilesystemDataStore(base_path=config.DATASTORE_PATH, thumbnail_size=thumbnail_size)
    raise ValueError(f"Unknown data store type: {config.DATASTORE_TYPE}")
