import io
import posixpath
from typing import Optional

from sqlalchemy.orm import Session

from logmigration.models import Attachment, SourceLogRecord
from logmigration.storage import DataStore, is_image, build_thumbnail_file_name


class AttachmentSink:
    """
    Persists attachment payloads to the data store and records them in the attachment table.
    """

    def __init__(self, data_store: DataStore):
        self.data_store = data_store

    def persist(
        self,
        session: Session,
        record: SourceLogRecord,
        payload: bytes,
        content_type: Optional[str],
        filename: str,
        common_path: str
    ) -> Attachment:
        """
        Save the payload (and its thumbnail for images) and insert the attachment row.

        Args:
            session: Session of the current batch
            record: Source log owning the payload
            payload: Whole payload content
            content_type: MIME type of the payload
            filename: Original file name
            common_path: Directory shared by the file and its thumbnail

        Returns:
            Flushed Attachment with its generated id

        Raises:
            StorageError: If the file or its thumbnail could not be stored
        """
        file_id = self.data_store.save(posixpath.join(common_path, filename), io.BytesIO(payload))

        thumbnail_id = None
        if is_image(content_type):
            thumbnail_id = self.data_store.save_thumbnail(
                build_thumbnail_file_name(common_path, filename),
                io.BytesIO(payload)
            )

        attachment = Attachment(
            file_id=file_id,
            thumbnail_id=thumbnail_id,
            content_type=content_type,
            project_id=record.file.project_id,
            launch_id=record.file.launch_id,
            item_id=record.item_id
        )
        session.add(attachment)
        session.flush()

        return attachment
