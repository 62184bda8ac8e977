from .base import Base
from .attachment import Attachment
from .log import Log, DEFAULT_LOG_LEVEL
from .source import SourceLogRecord, LogLevel, BinaryAttachment

__all__ = ['Base', 'Attachment', 'Log', 'DEFAULT_LOG_LEVEL', 'SourceLogRecord', 'LogLevel', 'BinaryAttachment']
