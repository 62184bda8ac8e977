"""
Pytest configuration and shared fixtures.
"""

import io
import tempfile
import shutil
from datetime import datetime, timezone

import pytest
from PIL import Image
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker

from logmigration.core import LogWriter
from logmigration.models import Base, SourceLogRecord, LogLevel, BinaryAttachment
from logmigration.storage import FilesystemDataStore

# Mirrors the error PostgreSQL raises for NUL characters in text values
REJECT_NULL_BYTES_TRIGGER = """
CREATE TRIGGER reject_null_bytes BEFORE INSERT ON log
WHEN has_null_byte(NEW.log_message)
BEGIN
    SELECT RAISE(ABORT, 'invalid byte sequence for encoding "UTF8": 0x00');
END
"""


def _register_functions(dbapi_connection, connection_record):
    dbapi_connection.create_function(
        'has_null_byte', 1, lambda value: int(value is not None and '\x00' in value)
    )


def make_record(uid, message='message', level=None, attachment=None, item_id=1,
                log_time=datetime(2019, 5, 14, 10, 30, tzinfo=timezone.utc)):
    """Build a source record with sensible defaults."""
    return SourceLogRecord(
        id=uid,
        log_time=log_time,
        last_modified=log_time,
        log_msg=message,
        item_id=item_id,
        level=LogLevel(log_level=level) if level is not None else None,
        file=attachment
    )


def make_png(width=200, height=100) -> bytes:
    """Encode a solid-color PNG image."""
    buffer = io.BytesIO()
    Image.new('RGB', (width, height), color=(200, 30, 30)).save(buffer, format='PNG')
    return buffer.getvalue()


def make_attachment(data: bytes, filename: str, content_type: str) -> BinaryAttachment:
    return BinaryAttachment.from_bytes(data, filename, content_type=content_type, project_id=7, launch_id=11)


@pytest.fixture
def temp_dir():
    """Fixture that provides a temporary directory and cleans it up after test"""
    tmp = tempfile.mkdtemp()
    yield tmp
    shutil.rmtree(tmp)


@pytest.fixture
def engine(temp_dir):
    """SQLite engine with the target tables created"""
    engine = create_engine(f'sqlite:///{temp_dir}/test.db', echo=False)
    event.listen(engine, 'connect', _register_functions)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine)


@pytest.fixture
def db_session(session_factory):
    """Database session for direct DB access in tests"""
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def data_store(temp_dir):
    return FilesystemDataStore(base_path=f"{temp_dir}/data")


@pytest.fixture
def writer(session_factory, data_store):
    """Fixture that provides a log writer over the test database and data store"""
    return LogWriter(session_factory, data_store)


@pytest.fixture
def reject_null_bytes(engine):
    """Make the test database reject NUL characters in log messages, like PostgreSQL does"""
    with engine.begin() as conn:
        conn.execute(text(REJECT_NULL_BYTES_TRIGGER))
