"""
==================================
Write helpers (insert/update/delete).
==================================

Executing counterparts of ``sql.dml``. Each helper returns the engine's
ResultSet (``rowcount`` holds the affected rows) or None when the engine
reports an error and the engine error policy does not raise.

Functions:
- insert: INSERT one row
- update: UPDATE the row identified by one of its own keys
- update_where / update_like / update_id: UPDATE matching rows
- delete_all: TRUNCATE a table
- delete_where / delete_like / delete_id: DELETE matching rows
- save: update when the key is set, insert otherwise
- replace: delete by key, then insert

Usage:
    from sql import writes

    writes.insert('user', {'name': 'alice', 'city': 'Paris'})
    writes.update('user', 'id', {'id': 4, 'city': 'Lyon'})
    writes.delete_where('user', 'city', 'Paris')
"""

from collections.abc import Mapping
from typing import Any, Optional

import engines
from engines.base import ResultSet
from logs.error_handler import report_internal_error
from sql.clauses import Columns, id_clause, like_clause, where_clause
from sql.dml import delete_statement, insert_statement, truncate_statement, update_statement


def insert(table: str, data: Mapping) -> Optional[ResultSet]:
    """Insert one row built from a column -> value mapping."""
    return engines.query(insert_statement(table, data))


def update(table: str, key: str, data: Mapping) -> Optional[ResultSet]:
    """
    Update the row whose ``key`` column equals ``data[key]``.

    Every other entry of ``data`` is written; the key column itself is not.

    Args:
        table: Table name
        key: Name of the identifying column, which must be present in data
        data: Row values including the key

    Returns:
        ResultSet of the UPDATE, or None
    """
    if key not in data:
        report_internal_error(f"Missing key {key!r} in update data for table {table!r}")
        return None

    values = dict(data)
    index = values.pop(key)
    return engines.query(update_statement(table, values, where_clause(key, index)))


def update_where(table: str, column: Columns, value: Any, data: Mapping) -> Optional[ResultSet]:
    """Update rows matching an equality condition (see where_clause)."""
    return engines.query(update_statement(table, data, where_clause(column, value)))


def update_like(table: str, column: Columns, value: Any, data: Mapping) -> Optional[ResultSet]:
    """Update rows matching a LIKE condition (see like_clause)."""
    return engines.query(update_statement(table, data, like_clause(column, value)))


def update_id(table: str, record_id: Any, data: Mapping) -> Optional[ResultSet]:
    """Update the rows whose ``id`` column equals the given integer."""
    return engines.query(update_statement(table, data, id_clause(record_id)))


def delete_all(table: str) -> Optional[ResultSet]:
    """Remove every row of a table with TRUNCATE."""
    return engines.query(truncate_statement(table))


def delete_where(table: str, column: Columns, value: Any = None) -> Optional[ResultSet]:
    """Delete rows matching an equality condition (see where_clause)."""
    return engines.query(delete_statement(table, where_clause(column, value)))


def delete_like(table: str, column: Columns, value: Any = None) -> Optional[ResultSet]:
    """Delete rows matching a LIKE condition (see like_clause)."""
    return engines.query(delete_statement(table, like_clause(column, value)))


def delete_id(table: str, record_id: Any) -> Optional[ResultSet]:
    """Delete the rows whose ``id`` column equals the given integer."""
    return engines.query(delete_statement(table, id_clause(record_id)))


def save(table: str, key: str, data: Mapping) -> Optional[ResultSet]:
    """
    Insert or update a row depending on its key.

    A truthy ``data[key]`` updates the existing row (see ``update``); a
    missing or falsy key inserts a new row without the key column, leaving
    its value to the database (auto increment).
    """
    if data.get(key):
        return update(table, key, data)

    values = {col: val for col, val in data.items() if col != key}
    return insert(table, values)


def replace(table: str, key: str, data: Mapping) -> Optional[ResultSet]:
    """Delete the row(s) matching ``data[key]``, then insert ``data``."""
    if key not in data:
        report_internal_error(f"Missing key {key!r} in replace data for table {table!r}")
        return None

    delete_where(table, key, data[key])
    return insert(table, data)
