import boto3
from botocore.exceptions import ClientError
from typing import BinaryIO, Optional

from logmigration.config import Config
from logmigration.errors import StorageError
from .base import DataStore, DEFAULT_THUMBNAIL_SIZE


class S3DataStore(DataStore):
    """
    Handles storage and retrieval of attachment blobs in S3.
    The blob path is used as the object key.
    """

    def __init__(self, bucket: Optional[str] = None, s3_client=None, thumbnail_size=DEFAULT_THUMBNAIL_SIZE):
        super().__init__(thumbnail_size)
        self.s3_client = s3_client or boto3.client(
            's3',
            aws_access_key_id=Config.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=Config.AWS_SECRET_ACCESS_KEY,
            region_name=Config.AWS_REGION
        )
        self.bucket = bucket or Config.S3_BUCKET

    def save(self, path: str, stream: BinaryIO) -> str:
        try:
            self.s3_client.put_object(Bucket=self.bucket, Key=path, Body=stream.read())
        except ClientError as e:
            raise StorageError(f"Failed to upload to S3: {e}") from e

        return path

    def load(self, file_id: str) -> Optional[bytes]:
        try:
            response = self.s3_client.get_object(Bucket=self.bucket, Key=file_id)
            return response['Body'].read()
        except ClientError as e:
            if e.response['Error']['Code'] == 'NoSuchKey':
                return None
            raise StorageError(f"Failed to retrieve from S3: {e}") from e

    def exists(self, file_id: str) -> bool:
        try:
            self.s3_client.head_object(Bucket=self.bucket, Key=file_id)
            return True
        except ClientError as e:
            if e.response['Error']['Code'] in ('404', 'NoSuchKey'):
                return False
            raise StorageError(f"Failed to check S3: {e}") from e

    def delete(self, file_id: str) -> bool:
        if not self.exists(file_id):
            return False

        try:
            self.s3_client.delete_object(Bucket=self.bucket, Key=file_id)
            return True
        except ClientError as e:
            raise StorageError(f"Failed to delete from S3: {e}") from e
