"""
==================================
Query helpers (reads).
==================================

Every helper combines a result type with a condition:

    Result types               Conditions
    run      ResultSet         (none)  template + values, see sql.formatter.make
    fetch_array  list of dicts _all    every row of a table
    fetch_row    dict or None  _where  equality match (sql.clauses.where_clause)
    fetch_value  first column  _like   LIKE match (sql.clauses.like_clause)
    fetch_count  int           _id     `id` column equals an integer
    fetch_exists bool

so ``fetch_row_id('user', 4)`` returns the first row of
``SELECT * FROM `user` WHERE `id` = 4`` as a dict. The ``sort`` parameter of
the table based helpers takes any form accepted by
``sql.clauses.order_clause``. Helpers taking a template follow ``make``:
pass a single ``None`` value for constant queries.

Every helper returns an empty value (None, [], 0, False) when the engine
reports an error and the engine error policy does not raise.

Usage:
    from sql import queries

    users = queries.fetch_array_where('user', 'city', 'Paris', sort='name')
    total = queries.fetch_value("SELECT COUNT(*) FROM `user`", None)
"""

from typing import Any, Dict, List, Optional

import engines
from engines.base import ResultSet
from sql.clauses import Columns, Sort, make_all, make_id, make_like, make_where
from sql.formatter import make

Row = Dict[str, Any]


def run(query: str, *values: Any) -> Optional[ResultSet]:
    """Format a template with ``make`` and execute it."""
    return engines.query(make(query, *values))


def run_all(table: str, sort: Sort = None) -> Optional[ResultSet]:
    return engines.query(make_all(table, sort))


def run_where(table: str, column: Columns, value: Any = None, sort: Sort = None) -> Optional[ResultSet]:
    return engines.query(make_where(table, column, value, sort))


def run_like(table: str, column: Columns, value: Any = None, sort: Sort = None) -> Optional[ResultSet]:
    return engines.query(make_like(table, column, value, sort))


def run_id(table: str, record_id: Any, sort: Sort = None) -> Optional[ResultSet]:
    return engines.query(make_id(table, record_id, sort))


# Whole result as a list of dicts

def fetch_array(query: str, *values: Any) -> List[Row]:
    return engines.result_array(run(query, *values))


def fetch_array_all(table: str, sort: Sort = None) -> List[Row]:
    return engines.result_array(run_all(table, sort))


def fetch_array_where(table: str, column: Columns, value: Any = None, sort: Sort = None) -> List[Row]:
    return engines.result_array(run_where(table, column, value, sort))


def fetch_array_like(table: str, column: Columns, value: Any = None, sort: Sort = None) -> List[Row]:
    return engines.result_array(run_like(table, column, value, sort))


def fetch_array_id(table: str, record_id: Any, sort: Sort = None) -> List[Row]:
    return engines.result_array(run_id(table, record_id, sort))


# First row as a dict

def fetch_row(query: str, *values: Any) -> Optional[Row]:
    return engines.result_row(run(query, *values))


def fetch_row_all(table: str, sort: Sort = None) -> Optional[Row]:
    return engines.result_row(run_all(table, sort))


def fetch_row_where(table: str, column: Columns, value: Any = None, sort: Sort = None) -> Optional[Row]:
    return engines.result_row(run_where(table, column, value, sort))


def fetch_row_like(table: str, column: Columns, value: Any = None, sort: Sort = None) -> Optional[Row]:
    return engines.result_row(run_like(table, column, value, sort))


def fetch_row_id(table: str, record_id: Any, sort: Sort = None) -> Optional[Row]:
    return engines.result_row(run_id(table, record_id, sort))


# First column of the first row

def fetch_value(query: str, *values: Any) -> Any:
    return engines.result_value(run(query, *values))


def fetch_value_all(table: str, sort: Sort = None) -> Any:
    return engines.result_value(run_all(table, sort))


def fetch_value_where(table: str, column: Columns, value: Any = None, sort: Sort = None) -> Any:
    return engines.result_value(run_where(table, column, value, sort))


def fetch_value_like(table: str, column: Columns, value: Any = None, sort: Sort = None) -> Any:
    return engines.result_value(run_like(table, column, value, sort))


def fetch_value_id(table: str, record_id: Any, sort: Sort = None) -> Any:
    return engines.result_value(run_id(table, record_id, sort))


# Number of rows

def fetch_count(query: str, *values: Any) -> int:
    return engines.result_count(run(query, *values))


def fetch_count_all(table: str, sort: Sort = None) -> int:
    return engines.result_count(run_all(table, sort))


def fetch_count_where(table: str, column: Columns, value: Any = None, sort: Sort = None) -> int:
    return engines.result_count(run_where(table, column, value, sort))


def fetch_count_like(table: str, column: Columns, value: Any = None, sort: Sort = None) -> int:
    return engines.result_count(run_like(table, column, value, sort))


def fetch_count_id(table: str, record_id: Any, sort: Sort = None) -> int:
    return engines.result_count(run_id(table, record_id, sort))


# At least one row?

def fetch_exists(query: str, *values: Any) -> bool:
    return engines.result_exists(run(query, *values))


def fetch_exists_all(table: str, sort: Sort = None) -> bool:
    return engines.result_exists(run_all(table, sort))


def fetch_exists_where(table: str, column: Columns, value: Any = None, sort: Sort = None) -> bool:
    return engines.result_exists(run_where(table, column, value, sort))


def fetch_exists_like(table: str, column: Columns, value: Any = None, sort: Sort = None) -> bool:
    return engines.result_exists(run_like(table, column, value, sort))


def fetch_exists_id(table: str, record_id: Any, sort: Sort = None) -> bool:
    return engines.result_exists(run_id(table, record_id, sort))
