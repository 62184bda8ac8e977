"""
Typed source records.

Documents read from the legacy store are schema-less; the write stage only
accepts these validated models so that every optional field is explicit.
"""
import io
from datetime import datetime
from pathlib import Path
from typing import Any, BinaryIO, Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(BaseModel):
    """Severity of a source log."""

    log_level: int
    """Numeric level code (e.g. 20000 for DEBUG, 40000 for ERROR)"""


class BinaryAttachment(BaseModel):
    """A binary payload stored next to a source log."""

    model_config = ConfigDict(frozen=True)

    filename: str
    """Original file name"""

    content_type: Optional[str] = None
    """MIME type reported by the source store"""

    project_id: Optional[int] = None
    """Project owning the log"""

    launch_id: Optional[int] = None
    """Launch owning the log"""

    opener: Callable[[], BinaryIO] = Field(repr=False)
    """Returns a fresh stream over the payload on every call"""

    def open(self) -> BinaryIO:
        """Open a new stream over the payload."""
        return self.opener()

    def read_bytes(self) -> bytes:
        """Read the whole payload into memory."""
        stream = self.open()
        try:
            return stream.read()
        finally:
            stream.close()

    @classmethod
    def from_bytes(cls, data: bytes, filename: str, **kwargs) -> "BinaryAttachment":
        """Wrap an in-memory payload."""
        return cls(filename=filename, opener=lambda: io.BytesIO(data), **kwargs)

    @classmethod
    def from_path(cls, path: str, filename: Optional[str] = None, **kwargs) -> "BinaryAttachment":
        """Wrap a payload stored in a local file."""
        file_path = Path(path)
        return cls(filename=filename or file_path.name, opener=lambda: file_path.open('rb'), **kwargs)


class SourceLogRecord(BaseModel):
    """A log document from the source store."""

    model_config = ConfigDict(frozen=True)

    id: str
    """Source document identifier, becomes the log uuid"""

    log_time: datetime
    last_modified: Optional[datetime] = None
    log_msg: Optional[str] = None
    item_id: int
    level: Optional[LogLevel] = None
    file: Optional[BinaryAttachment] = None

    @field_validator('id', mode='before')
    @classmethod
    def stringify_id(cls, v: Any) -> str:
        """Accept ObjectId-like identifiers by their string form."""
        if v is None:
            raise ValueError("Log identifier is required")
        return str(v)

    @property
    def has_attachment(self) -> bool:
        return self.file is not None

    @classmethod
    def from_document(cls, doc: Dict[str, Any],
                      opener: Optional[Callable[[], BinaryIO]] = None) -> "SourceLogRecord":
        """
        Build a record from a raw source document.

        Args:
            doc: Document using the source field names (_id, logTime, logMsg, ...)
            opener: Stream factory for the payload when the document has a file

        Returns:
            Validated SourceLogRecord

        Raises:
            pydantic.ValidationError: If required fields are missing or malformed
            ValueError: If the document references a file but no opener is given
        """
        level = doc.get('level')
        file_doc = doc.get('file')
        attachment = None
        if file_doc is not None:
            if opener is None:
                raise ValueError(f"Log {doc.get('_id')} has a file but no payload was provided")
            attachment = BinaryAttachment(
                filename=file_doc['filename'],
                content_type=file_doc.get('contentType'),
                project_id=doc.get('projectId'),
                launch_id=doc.get('launchId'),
                opener=opener,
            )
        return cls(
            id=doc.get('_id'),
            log_time=doc.get('logTime'),
            last_modified=doc.get('last_modified'),
            log_msg=doc.get('logMsg'),
            item_id=doc.get('itemId'),
            level=LogLevel(log_level=level['log_level']) if level is not None else None,
            file=attachment,
        )
