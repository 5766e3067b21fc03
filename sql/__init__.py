"""
========================================
SQL building and execution for safesql.
========================================

This package turns templates and simple patterns into safe SQL strings and
runs them through the active engine driver (see ``engines``).

The package follows a clear organization:
    - formatter.py: printf-style templates with type-specific escaping (make)
    - clauses.py: WHERE / LIKE / ORDER BY / SET clauses and SELECT builders
    - dml.py: INSERT / UPDATE / DELETE / TRUNCATE statement builders
    - queries.py: executing reads (run_*, fetch_<type>_<condition>)
    - writes.py: executing writes (insert, update_*, delete_*, save, replace)
    - dates.py: DATE and DATETIME column values

Architecture:
    - Builders (formatter, clauses, dml) are pure apart from escaping,
      which asks the active engine driver
    - queries.py and writes.py are the only modules that execute SQL
    - Table and column names are quoted, never validated; data values are
      always escaped

Example:
    >>> from sql import make, fetch_array_where, insert
    >>>
    >>> make("SELECT * FROM `user` WHERE `name` = '%s'", "alice")
    "SELECT * FROM `user` WHERE `name` = 'alice'"
    >>> insert('user', {'name': 'bob', 'city': 'Paris'})
    >>> fetch_array_where('user', 'city', 'Paris', sort='name')
"""

__version__ = "0.1.0"

from .clauses import (
    id_clause,
    like_clause,
    make_all,
    make_id,
    make_like,
    make_where,
    order_clause,
    set_clause,
    where_clause,
)
from .dates import sql_date, sql_time
from .formatter import make, make_args
from .queries import (
    fetch_array,
    fetch_array_all,
    fetch_array_id,
    fetch_array_like,
    fetch_array_where,
    fetch_count,
    fetch_count_all,
    fetch_count_id,
    fetch_count_like,
    fetch_count_where,
    fetch_exists,
    fetch_exists_all,
    fetch_exists_id,
    fetch_exists_like,
    fetch_exists_where,
    fetch_row,
    fetch_row_all,
    fetch_row_id,
    fetch_row_like,
    fetch_row_where,
    fetch_value,
    fetch_value_all,
    fetch_value_id,
    fetch_value_like,
    fetch_value_where,
    run,
    run_all,
    run_id,
    run_like,
    run_where,
)
from .writes import (
    delete_all,
    delete_id,
    delete_like,
    delete_where,
    insert,
    replace,
    save,
    update,
    update_id,
    update_like,
    update_where,
)

__all__ = [
    # Formatter
    'make', 'make_args',
    # Clauses and SELECT builders
    'where_clause', 'like_clause', 'id_clause', 'order_clause', 'set_clause',
    'make_all', 'make_where', 'make_like', 'make_id',
    # Reads
    'run', 'run_all', 'run_where', 'run_like', 'run_id',
    'fetch_array', 'fetch_array_all', 'fetch_array_where', 'fetch_array_like', 'fetch_array_id',
    'fetch_row', 'fetch_row_all', 'fetch_row_where', 'fetch_row_like', 'fetch_row_id',
    'fetch_value', 'fetch_value_all', 'fetch_value_where', 'fetch_value_like', 'fetch_value_id',
    'fetch_count', 'fetch_count_all', 'fetch_count_where', 'fetch_count_like', 'fetch_count_id',
    'fetch_exists', 'fetch_exists_all', 'fetch_exists_where', 'fetch_exists_like', 'fetch_exists_id',
    # Writes
    'insert', 'update', 'update_where', 'update_like', 'update_id',
    'delete_all', 'delete_where', 'delete_like', 'delete_id', 'save', 'replace',
    # Dates
    'sql_date', 'sql_time'
]
