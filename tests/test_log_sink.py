"""Tests for mapping source records to log rows."""
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from logmigration.core import LogSink
from logmigration.core.log_sink import insert_ignoring_conflicts
from logmigration.errors import UnsupportedDialectError
from logmigration.models import Log

from conftest import make_record


def test_to_row_maps_all_columns():
    record = make_record('5c1a0001', 'hello', level=20000, item_id=42,
                         log_time=datetime(2019, 5, 14, 10, 30, tzinfo=timezone.utc))

    row = LogSink.to_row(record)

    assert row == {
        'uuid': '5c1a0001',
        'log_time': datetime(2019, 5, 14, 10, 30, tzinfo=timezone.utc),
        'log_message': 'hello',
        'item_id': 42,
        'last_modified': datetime(2019, 5, 14, 10, 30, tzinfo=timezone.utc),
        'log_level': 20000,
        'attachment_id': None,
    }


def test_to_row_defaults_level_and_keeps_attachment_id():
    row = LogSink.to_row(make_record('5c1a0001'), attachment_id=9)

    assert row['log_level'] == 30000
    assert row['attachment_id'] == 9


def test_naive_timestamps_are_read_as_utc():
    row = LogSink.to_row(make_record('5c1a0001', log_time=datetime(2019, 5, 14, 10, 30)))
    assert row['log_time'] == datetime(2019, 5, 14, 10, 30, tzinfo=timezone.utc)


def test_insert_many_without_records_runs_nothing():
    session = Mock()
    assert LogSink().insert_many(session, []) == 0
    session.execute.assert_not_called()


def test_insert_many_runs_one_statement(db_session):
    count = LogSink().insert_many(db_session, [make_record('a'), make_record('b'), make_record('a')])
    db_session.commit()

    assert count == 3
    assert db_session.query(Log).count() == 2


def test_unsupported_dialect():
    session = Mock()
    session.get_bind.return_value.dialect.name = 'mssql'

    with pytest.raises(UnsupportedDialectError) as exc_info:
        insert_ignoring_conflicts(session, Log.__table__)

    assert exc_info.value.dialect_name == 'mssql'


def test_postgresql_statement_skips_conflicts():
    from sqlalchemy.dialects import postgresql

    session = Mock()
    session.get_bind.return_value.dialect.name = 'postgresql'

    statement = insert_ignoring_conflicts(session, Log.__table__)
    sql = str(statement.compile(dialect=postgresql.dialect()))

    assert sql.startswith('INSERT INTO log')
    assert sql.endswith('ON CONFLICT DO NOTHING')


def test_existing_uuids(db_session):
    LogSink().insert_many(db_session, [make_record('a'), make_record('b')])

    assert LogSink().existing_uuids(db_session, ['a', 'c']) == {'a'}
    assert LogSink().existing_uuids(db_session, []) == set()
