"""
Batch write stage of the log migration.

A batch of source logs is written in one transaction: attachment-free logs go
in with a single bulk insert, logs with a payload are written one by one
(file, thumbnail, attachment row, log row). If the database rejects the batch
because of NUL characters in a message, the messages are cleaned and the
batch is written once more in a new transaction.
"""
import logging
import posixpath
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session, sessionmaker

from logmigration.errors import is_null_byte_violation, strip_null_bytes
from logmigration.models import SourceLogRecord
from logmigration.storage import DataStore, FilePathGenerator
from .attachment_sink import AttachmentSink
from .log_sink import LogSink

logger = logging.getLogger(__name__)


def sanitize_messages(items: Sequence[SourceLogRecord]) -> List[SourceLogRecord]:
    """Copy records with NUL characters removed from their messages."""
    return [item.model_copy(update={'log_msg': strip_null_bytes(item.log_msg)}) for item in items]


class LogWriter:
    """
    Writes batches of source logs into the log and attachment tables.

    Each call to write() uses its own session, so batches never share a
    transaction even when the session factory and data store are shared
    between workers.
    """

    # First attempt plus one retry after NUL characters were stripped
    MAX_ATTEMPTS = 2

    def __init__(
        self,
        session_factory: sessionmaker,
        data_store: DataStore,
        path_generator: Optional[FilePathGenerator] = None,
        log_sink: Optional[LogSink] = None,
        attachment_sink: Optional[AttachmentSink] = None
    ):
        self.session_factory = session_factory
        self.data_store = data_store
        self.path_generator = path_generator or FilePathGenerator()
        self.log_sink = log_sink or LogSink()
        self.attachment_sink = attachment_sink or AttachmentSink(data_store)

    def write(self, items: Sequence[SourceLogRecord]) -> None:
        """
        Write a batch atomically.

        Args:
            items: Source logs of the batch

        Raises:
            Exception: Whatever made the batch fail, other than a NUL character
                failure on the first attempt
        """
        items = list(items)
        for attempt in range(1, self.MAX_ATTEMPTS + 1):
            try:
                self._write_in_transaction(items)
                return
            except Exception as e:
                if attempt < self.MAX_ATTEMPTS and is_null_byte_violation(e):
                    logger.warning(
                        f"Batch of {len(items)} logs {_describe(items)} rejected because of NUL characters "
                        f"({e.__class__.__name__}), retrying with cleaned messages"
                    )
                    items = sanitize_messages(items)
                    continue
                logger.error(
                    f"Failed to write batch of {len(items)} logs {_describe(items)} "
                    f"on attempt {attempt}: {e.__class__.__name__}: {e}"
                )
                raise

    def _write_in_transaction(self, items: List[SourceLogRecord]) -> None:
        session = self.session_factory()
        try:
            self._write_batch(session, items)
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _write_batch(self, session: Session, items: List[SourceLogRecord]) -> None:
        plain = [item for item in items if not item.has_attachment]
        with_attachment = [item for item in items if item.has_attachment]

        self.log_sink.insert_many(session, plain)

        with_attachment = self._skip_known_uuids(session, with_attachment)
        for item in with_attachment:
            self._write_with_attachment(session, item)

        logger.debug(f"Wrote {len(plain)} plain logs and {len(with_attachment)} logs with attachments")

    def _skip_known_uuids(self, session: Session, items: List[SourceLogRecord]) -> List[SourceLogRecord]:
        """
        Drop attachment logs whose log row would be skipped anyway.

        Runs after the plain insert, so uuids stored earlier in this batch count
        as known too. Repeats of a uuid inside the batch keep their first record.
        """
        seen = self.log_sink.existing_uuids(session, (item.id for item in items))
        remaining = []
        for item in items:
            if item.id in seen:
                logger.debug(f"Skipping attachment of log {item.id}, the log is already stored")
                continue
            seen.add(item.id)
            remaining.append(item)
        return remaining

    def _write_with_attachment(self, session: Session, item: SourceLogRecord) -> None:
        binary = item.file
        payload = binary.read_bytes()

        common_path = posixpath.join(str(binary.project_id), self.path_generator.generate())
        attachment = self.attachment_sink.persist(
            session,
            item,
            payload,
            binary.content_type,
            binary.filename,
            common_path
        )

        self.log_sink.insert_one(session, item, attachment.id)


def _describe(items: Sequence[SourceLogRecord]) -> str:
    """Batch boundary for log messages: first and last uuid."""
    if not items:
        return '[]'
    return f"[{items[0].id} .. {items[-1].id}]"
