"""
===========================================
Data Manipulation Language (DML) Utilities.
===========================================

Pure functions that create complete INSERT, UPDATE, DELETE and TRUNCATE
statements. Values are escaped and quoted here; conditions come ready-made
from ``sql.clauses``. Nothing is executed: see ``sql.writes`` for the
executing counterparts.

Functions:
- insert_statement: INSERT of one row from a column -> value mapping
- update_statement: UPDATE with a SET mapping and a ready WHERE clause
- delete_statement: DELETE with a ready WHERE clause
- truncate_statement: TRUNCATE a whole table

Usage:
    from sql.clauses import where_clause
    from sql.dml import update_statement

    sql = update_statement('user', {'city': 'Lyon'}, where_clause('id', 4))
"""

from collections.abc import Mapping

from engines.base import quote_identifier
from logs.error_handler import report_internal_error
from sql.clauses import set_clause
from sql.formatter import escape_value


def insert_statement(table: str, data: Mapping) -> str:
    """
    Generate an INSERT statement for one row.

    Args:
        table: Table name
        data: Column -> value mapping

    Returns:
        SQL INSERT statement
    """
    if not data:
        report_internal_error(f"Empty data for insert into {quote_identifier(table)}")
        return ""

    columns = ", ".join(quote_identifier(col) for col in data)
    values = ", ".join(f"'{escape_value(val)}'" for val in data.values())

    return f"INSERT INTO {quote_identifier(table)} ({columns}) VALUES ({values})"


def update_statement(table: str, data: Mapping, where: str) -> str:
    """
    Generate an UPDATE statement.

    Args:
        table: Table name
        data: Column -> new value mapping
        where: Complete WHERE clause (see sql.clauses)

    Returns:
        SQL UPDATE statement
    """
    return f"UPDATE {quote_identifier(table)} {set_clause(data)} {where}"


def delete_statement(table: str, where: str) -> str:
    """Generate a DELETE statement restricted by a complete WHERE clause."""
    return f"DELETE FROM {quote_identifier(table)} {where}"


def truncate_statement(table: str) -> str:
    """Generate a TRUNCATE statement removing every row of a table."""
    return f"TRUNCATE {quote_identifier(table)}"
