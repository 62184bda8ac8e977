"""Exception types and failure classification for the log write stage."""
from sqlalchemy.exc import DataError, IntegrityError

NULL_BYTE = '\x00'

# Fragments of the messages PostgreSQL and its drivers produce for NUL characters
# in text values ("invalid byte sequence for encoding "UTF8": 0x00",
# "A string literal cannot contain NUL (0x00) characters.")
_NULL_BYTE_MARKERS = ('0x00', 'nul character', 'nul (0x00)', 'null character')


class LogMigrationError(Exception):
    """Base class for errors raised by the log migration package."""


class StorageError(LogMigrationError):
    """A data store could not save, load or delete a blob."""


class UnsupportedDialectError(LogMigrationError):
    """The bound database has no skip-on-conflict insert support."""

    def __init__(self, dialect_name: str):
        super().__init__(f"Skip-on-conflict inserts are not supported for dialect '{dialect_name}'")
        self.dialect_name = dialect_name


def is_null_byte_violation(exc: BaseException) -> bool:
    """
    Check whether a failed write was caused by NUL characters in a text value.

    Only integrity and data errors reported by the database, plus the
    ValueError psycopg2 raises before sending such a value, qualify.
    Every other failure is fatal for the batch.
    """
    if not isinstance(exc, (IntegrityError, DataError, ValueError)):
        return False
    message = str(getattr(exc, 'orig', None) or exc).lower()
    return any(marker in message for marker in _NULL_BYTE_MARKERS)


def strip_null_bytes(text):
    """Remove NUL characters from a text value, passing None through."""
    if text is None:
        return None
    return text.replace(NULL_BYTE, '')
