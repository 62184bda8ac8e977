import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration"""

    # Database
    DATABASE_URL = os.getenv('DATABASE_URL', 'postgresql://localhost/reportportal')

    # Data store
    DATASTORE_TYPE = os.getenv('DATASTORE_TYPE', 'filesystem')
    DATASTORE_PATH = os.getenv('DATASTORE_PATH', '.logmigration/data')

    # S3
    AWS_ACCESS_KEY_ID = os.getenv('AWS_ACCESS_KEY_ID')
    AWS_SECRET_ACCESS_KEY = os.getenv('AWS_SECRET_ACCESS_KEY')
    AWS_REGION = os.getenv('AWS_REGION', 'us-east-1')
    S3_BUCKET = os.getenv('S3_BUCKET')

    # Thumbnails
    THUMBNAIL_WIDTH = int(os.getenv('THUMBNAIL_WIDTH', '80'))
    THUMBNAIL_HEIGHT = int(os.getenv('THUMBNAIL_HEIGHT', '60'))

    # Migration
    BATCH_SIZE = int(os.getenv('BATCH_SIZE', '200'))
