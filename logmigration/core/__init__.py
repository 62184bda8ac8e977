from .log_sink import LogSink
from .attachment_sink import AttachmentSink
from .log_writer import LogWriter

__all__ = ['LogSink', 'AttachmentSink', 'LogWriter']
