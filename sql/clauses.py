"""
============================
SQL Clause Builder Utilities.
============================

Low-level building blocks shared by the query and write helpers. Every
data value is escaped with the active engine driver and single-quoted;
table and column names are backtick-quoted but NOT validated. Never build
a name from user input without checking it first (``engines.verify_table``
and ``engines.verify_column`` do that against the live schema).

Clause Builders:
- where_clause: ``WHERE `col` = 'value' [AND ...]``
- like_clause: ``WHERE `col` LIKE 'pattern' [AND ...]``
- id_clause: ``WHERE `id` = <integer>``
- order_clause: ``ORDER BY ...`` from a sort specification
- set_clause: ``SET `col` = 'value', ...`` for updates

Query Builders:
- make_all: ``SELECT * FROM `table```
- make_where / make_like / make_id: ``SELECT *`` with the matching clause

Condition forms accepted by where_clause and like_clause:
    where_clause('name', 'alice')
    where_clause(['name', 'city'], ['alice', 'Paris'])
    where_clause({'name': 'alice', 'city': 'Paris'})

Sort forms accepted by order_clause (and every ``sort`` parameter):
    None / '' / []                      no ORDER BY
    'name'                              ORDER BY `name`
    {'name': 'desc', 'id': 'asc'}       ORDER BY `name` DESC, `id` ASC
    ['city', ('name', 'desc')]          ORDER BY `city`, `name` DESC
    (directions are 'asc' or 'desc' in any case; anything else is invalid)

Usage:
    from sql.clauses import make_where, order_clause

    sql = make_where('user', {'city': 'Paris'}, sort={'created': 'desc'})
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Union

from engines.base import quote_identifier
from logs.error_handler import report_internal_error
from sql.formatter import escape_value, to_int

Columns = Union[str, List[str], Mapping]
Sort = Union[None, str, Mapping, List[Any], tuple]

SCALARS = (str, int, float)
DIRECTIONS = ('ASC', 'DESC')


def _pairs(column: Columns, value: Any, accepts, caller: str) -> Dict[Any, Any]:
    """Normalize the three condition forms to a non-empty column -> value dict."""
    pairs = {}
    if isinstance(column, str) and isinstance(value, accepts):
        pairs = {column: value}
    elif isinstance(column, (list, tuple)) and isinstance(value, (list, tuple)):
        if len(column) == len(value):
            pairs = dict(zip(column, value))
    elif isinstance(column, Mapping) and value is None:
        pairs = dict(column)

    if not pairs:
        report_internal_error(f"Invalid input to {caller}")
    return pairs


def _condition(pairs: Dict[Any, Any], operator: str) -> str:
    conditions = [
        f"{quote_identifier(col)} {operator} '{escape_value(val)}'"
        for col, val in pairs.items()
    ]
    return "WHERE " + " AND ".join(conditions)


def where_clause(column: Columns, value: Any = None) -> str:
    """
    Build an equality WHERE clause.

    Args:
        column: Column name, list of column names, or column -> value mapping
        value: Scalar value (str/int/float/bool), list of values matching
            the column list, or None with a mapping

    Returns:
        WHERE clause string
    """
    return _condition(_pairs(column, value, SCALARS, 'where_clause'), '=')


def like_clause(column: Columns, value: Any = None) -> str:
    """
    Build a LIKE WHERE clause.

    Same forms as ``where_clause`` except that a single value must be a
    string pattern. ``%`` and ``_`` wildcards pass through untouched.
    """
    return _condition(_pairs(column, value, str, 'like_clause'), 'LIKE')


def id_clause(record_id: Any) -> str:
    """WHERE clause on the ``id`` column; the id is coerced to an integer."""
    return f"WHERE `id` = {to_int(record_id)}"


def order_clause(sort: Sort = None) -> str:
    """
    Build an ORDER BY clause from a sort specification.

    Args:
        sort: See module docstring for the accepted forms

    Returns:
        ORDER BY clause, or an empty string when there is nothing to sort by
    """
    if not sort:
        return ""

    if isinstance(sort, str):
        return f"ORDER BY {quote_identifier(sort)}"

    if isinstance(sort, Mapping):
        items = list(sort.items())
    elif isinstance(sort, (list, tuple)):
        items = list(sort)
    else:
        report_internal_error(f"Invalid sort type: {sort!r}")
        return ""

    columns = []
    for item in items:
        if isinstance(item, str):
            columns.append(quote_identifier(item))
        elif (isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str)
              and str(item[1]).upper() in DIRECTIONS):
            columns.append(f"{quote_identifier(item[0])} {str(item[1]).upper()}")
        else:
            report_internal_error(f"Invalid sort column: {sort!r}")
            return ""

    return "ORDER BY " + ", ".join(columns)


def set_clause(data: Mapping) -> str:
    """
    Build the SET clause of an UPDATE statement.

    Args:
        data: Column -> new value mapping

    Returns:
        SET clause string
    """
    if not data:
        report_internal_error("Empty data for SET clause")
        return ""

    updates = [
        f"{quote_identifier(col)} = '{escape_value(val)}'"
        for col, val in data.items()
    ]
    return "SET " + ", ".join(updates)


def _select(table: str, *clauses: str) -> str:
    parts = [f"SELECT * FROM {quote_identifier(table)}"]
    parts.extend(clause for clause in clauses if clause)
    return " ".join(parts)


def make_all(table: str, sort: Sort = None) -> str:
    """SELECT every row of a table."""
    return _select(table, order_clause(sort))


def make_where(table: str, column: Columns, value: Any = None, sort: Sort = None) -> str:
    """SELECT rows matching an equality WHERE clause (see ``where_clause``)."""
    return _select(table, where_clause(column, value), order_clause(sort))


def make_like(table: str, column: Columns, value: Any = None, sort: Sort = None) -> str:
    """SELECT rows matching a LIKE WHERE clause (see ``like_clause``)."""
    return _select(table, like_clause(column, value), order_clause(sort))


def make_id(table: str, record_id: Any, sort: Sort = None) -> str:
    """SELECT rows whose ``id`` column equals the given integer."""
    return _select(table, id_clause(record_id), order_clause(sort))
