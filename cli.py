#!/usr/bin/env python3
"""Log migration CLI - create the target tables and migrate exported logs."""
import argparse
import logging
import sys


def setup_logging(log_level: str):
    """Configure logging for the CLI."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def cmd_init_db(args):
    """Create the log and attachment tables."""
    from logmigration.config import Config
    from logmigration.models.base import init_db

    setup_logging(args.log_level)

    database_url = args.database_url or Config.DATABASE_URL
    logger = logging.getLogger(__name__)
    logger.info(f"Creating tables in {database_url}")

    init_db(database_url)


def cmd_migrate(args):
    """Write an exported set of source logs batch by batch."""
    from logmigration.config import Config
    from logmigration.core import LogWriter
    from logmigration.models.base import create_session_factory
    from logmigration.reader import iter_records, batched
    from logmigration.storage import create_data_store

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    database_url = args.database_url or Config.DATABASE_URL
    batch_size = args.batch_size or Config.BATCH_SIZE

    writer = LogWriter(create_session_factory(database_url), create_data_store())

    written = 0
    for batch_number, batch in enumerate(batched(iter_records(args.input, args.attachments_dir), batch_size), start=1):
        try:
            writer.write(batch)
        except Exception as e:
            logger.error(f"Batch {batch_number} failed after {written} logs were written: {e}", exc_info=True)
            sys.exit(1)
        written += len(batch)
        logger.info(f"Batch {batch_number} written ({written} logs so far)")

    logger.info(f"Migration finished: {written} logs written")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description='Log migration - move source logs and attachments into the relational store',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create the target tables
  %(prog)s init-db

  # Migrate an export in batches of 500
  %(prog)s migrate --input logs.jsonl --attachments-dir ./files --batch-size 500
"""
    )

    # Global options
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Set the logging level (default: INFO)'
    )
    parser.add_argument(
        '--database-url',
        help='Target database URL (default: from config)'
    )

    # Create subparsers for commands
    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        required=True
    )

    init_parser = subparsers.add_parser(
        'init-db',
        help='Create the target tables',
        description='Create the log and attachment tables'
    )
    init_parser.set_defaults(func=cmd_init_db)

    migrate_parser = subparsers.add_parser(
        'migrate',
        help='Migrate exported logs',
        description='Write exported source logs into the target database and data store'
    )
    migrate_parser.add_argument(
        '--input',
        required=True,
        help='JSON-lines export of source log documents'
    )
    migrate_parser.add_argument(
        '--attachments-dir',
        help='Directory attachment paths are relative to (default: directory of the export)'
    )
    migrate_parser.add_argument(
        '--batch-size',
        type=int,
        help='Number of logs per batch (default: from config)'
    )
    migrate_parser.set_defaults(func=cmd_migrate)

    # Parse arguments
    args = parser.parse_args()

    # Execute the command
    args.func(args)


if __name__ == '__main__':
    main()
