"""Log model - one row per migrated source log."""
from sqlalchemy import Column, String, Integer, BigInteger, DateTime, ForeignKey, Text
from .base import Base

DEFAULT_LOG_LEVEL = 30000


class Log(Base):
    """
    A log message attached to a test item.

    The uuid carries the identifier of the source document, so it is unique
    and a record that was already migrated is skipped on insert.
    """
    __tablename__ = 'log'

    id = Column(Integer, primary_key=True, autoincrement=True)

    uuid = Column(String(255), nullable=False, unique=True)

    log_time = Column(DateTime(timezone=True), nullable=False)

    log_message = Column(Text, nullable=True)

    item_id = Column(BigInteger, nullable=False, index=True)

    last_modified = Column(DateTime(timezone=True), nullable=True)

    log_level = Column(Integer, nullable=False, default=DEFAULT_LOG_LEVEL)

    attachment_id = Column(Integer, ForeignKey('attachment.id'), nullable=True)

    def __repr__(self):
        message = self.log_message or ''
        preview = message[:50] + '...' if len(message) > 50 else message
        return f"<Log(uuid='{self.uuid}', level={self.log_level}, message='{preview}')>"
