"""
Log rows: mapping from source records and skip-on-conflict inserts.
"""
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from logmigration.errors import UnsupportedDialectError
from logmigration.models import Log, SourceLogRecord, DEFAULT_LOG_LEVEL
from logmigration.utils import to_utc

_DIALECT_INSERTS = {
    'postgresql': postgresql.insert,
    'sqlite': sqlite.insert,
}


def insert_ignoring_conflicts(session: Session, table):
    """
    Build an INSERT ... ON CONFLICT DO NOTHING statement for the session's database.

    Raises:
        UnsupportedDialectError: If the bound dialect has no ON CONFLICT clause
    """
    dialect_name = session.get_bind().dialect.name
    insert = _DIALECT_INSERTS.get(dialect_name)
    if insert is None:
        raise UnsupportedDialectError(dialect_name)
    return insert(table).on_conflict_do_nothing()


class LogSink:
    """Writes migrated logs into the log table."""

    table = Log.__table__

    @staticmethod
    def to_row(record: SourceLogRecord, attachment_id: Optional[int] = None) -> Dict[str, Any]:
        """
        Map a source record to log column values.

        Args:
            record: Source log
            attachment_id: Id of the attachment row the log refers to, if any

        Returns:
            Dict keyed by log column names
        """
        log_level = record.level.log_level if record.level is not None else DEFAULT_LOG_LEVEL
        return {
            'uuid': str(record.id),
            'log_time': to_utc(record.log_time),
            'log_message': record.log_msg,
            'item_id': record.item_id,
            'last_modified': to_utc(record.last_modified),
            'log_level': log_level,
            'attachment_id': attachment_id,
        }

    def insert_many(self, session: Session, records: Sequence[SourceLogRecord]) -> int:
        """
        Insert attachment-free logs with a single executemany statement.
        Logs whose uuid already exists are skipped.

        Returns:
            Number of rows submitted
        """
        rows: List[Dict[str, Any]] = [self.to_row(record) for record in records]
        if not rows:
            return 0
        session.execute(insert_ignoring_conflicts(session, self.table), rows)
        return len(rows)

    def insert_one(self, session: Session, record: SourceLogRecord, attachment_id: Optional[int] = None) -> None:
        """Insert one log, skipping it if its uuid already exists."""
        session.execute(insert_ignoring_conflicts(session, self.table), self.to_row(record, attachment_id))

    def existing_uuids(self, session: Session, uuids: Iterable[str]) -> Set[str]:
        """Return the subset of uuids that already have a log row."""
        uuids = set(uuids)
        if not uuids:
            return set()
        return set(session.execute(select(Log.uuid).where(Log.uuid.in_(uuids))).scalars())
