"""
=================================
Command line entry point for safesql.
=================================

Thin CLI around the library, handy for trying templates, checking a
database and writing to the application logs from shell scripts.

Commands:
    make QUERY [VALUE ...]      print the SQL produced by sql.make
    query QUERY [VALUE ...]     run the query and print the rows as JSON
    check                       wait until the database answers
    verify-table TABLE          check that a table exists
    log NAME TEXT [--block]     append TEXT to the named log file

Usage:
    # Preview a formatted query (no database needed)
    python main.py make "SELECT * FROM \\`user\\` WHERE \\`name\\` = '%s'" alice

    # Constant query: pass an empty value list with --no-data
    python main.py query "SELECT COUNT(*) AS n FROM \\`user\\`" --no-data

    # ODBC engine
    python main.py --engine odbc check
"""

import argparse
import json
import sys
from typing import List, Optional

import engines
from core.config import config
from core.logger import get_logger, setup_logging
from logs.error_handler import SafeSqlError
from logs.file_log import log_block, log_filepath, log_line
from sql.formatter import make
from sql.queries import run
from utils.database_utils import DatabaseConnectionError, wait_for_database

logger = get_logger(__name__)


def _values(args: argparse.Namespace) -> list:
    """CLI values; --no-data stands for the single None of a constant query."""
    return [None] if args.no_data else list(args.values)


def cmd_make(args: argparse.Namespace) -> int:
    print(make(args.query, *_values(args)))
    return 0


def cmd_query(args: argparse.Namespace) -> int:
    result = run(args.query, *_values(args))
    if result is None:
        logger.error(f"❌ Query failed, see {log_filepath(config.sql.engine_error.log_file)}")
        return 1
    rows = engines.result_array(result)
    print(json.dumps(rows, indent=2, default=str))
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    wait_for_database(max_retries=args.retries, retry_delay=args.delay)
    return 0


def cmd_verify_table(args: argparse.Namespace) -> int:
    name = engines.verify_table(args.table)
    if name is None:
        logger.error(f"❌ Table {args.table!r} not found")
        return 1
    logger.info(f"✅ Table {name!r} exists")
    return 0


def cmd_log(args: argparse.Namespace) -> int:
    writer = log_block if args.block else log_line
    if not writer(args.name, args.text, autodate=not args.no_date):
        return 1
    logger.info(f"Written to {log_filepath(args.name)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='safesql',
        description="safesql - safe SQL templates, query helpers and file logs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  safesql make "SELECT * FROM \\`user\\` WHERE \\`id\\` = %d" 42
  safesql query "SELECT * FROM \\`user\\` WHERE \\`city\\` = '%s'" Paris
  safesql --engine odbc check --retries 3
  safesql log deploy "Release 1.4 deployed"
        """
    )
    parser.add_argument(
        '--engine',
        choices=sorted(engines.ENGINES),
        help=f"SQL engine to use (default: {config.engine})"
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging (DEBUG level)'
    )

    subparsers = parser.add_subparsers(dest='command')

    for name, handler, help_text in (
        ('make', cmd_make, 'Print the SQL built from a template'),
        ('query', cmd_query, 'Run a template query and print rows as JSON'),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument('query', help='Template using %%s, %%d, %%f placeholders')
        sub.add_argument('values', nargs='*', help='Data values for the placeholders')
        sub.add_argument(
            '--no-data',
            action='store_true',
            help='Constant query without data values'
        )
        sub.set_defaults(handler=handler)

    check = subparsers.add_parser('check', help='Wait until the database answers')
    check.add_argument('--retries', type=int, default=10, help='Maximum attempts')
    check.add_argument('--delay', type=int, default=2, help='Seconds between attempts')
    check.set_defaults(handler=cmd_check)

    verify = subparsers.add_parser('verify-table', help='Check that a table exists')
    verify.add_argument('table', help='Table name')
    verify.set_defaults(handler=cmd_verify_table)

    log = subparsers.add_parser('log', help='Append text to a named log file')
    log.add_argument('name', help='Log name')
    log.add_argument('text', help='Text to write')
    log.add_argument('--block', action='store_true', help='Write as a block')
    log.add_argument('--no-date', action='store_true', help='Omit the timestamp')
    log.set_defaults(handler=cmd_log)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Command-line interface for safesql.

    Exit Codes:
        0: Success
        1: Error
        130: User interrupt (Ctrl+C)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(log_level='DEBUG' if args.verbose else 'INFO')

    if args.command is None:
        parser.print_help()
        logger.warning("⚠️  No command specified")
        return 1

    try:
        if args.engine:
            engines.engine_set(args.engine)
        return args.handler(args)

    except (SafeSqlError, DatabaseConnectionError, ValueError) as e:
        logger.error(f"❌ {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("⚠️  Operation interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"❌ Unexpected error: {e}", exc_info=True)
        return 1


if __name__ == '__main__':
    sys.exit(main())
