"""
=====================================
Engine driver base class and results.
=====================================

An engine driver is the only place that talks to a database. It executes
opaque SQL strings, escapes string data for inclusion in SQL literals and
turns results into plain Python values. Everything above it (formatter,
clause builders, query helpers) is engine independent.

Classes:
    ResultSet: Buffered query result with a read cursor
    BaseEngine: Shared driver behaviour; subclasses provide escaping

Statements run on the engine's explicit connection when one has been
registered (``engines.connection_set``), otherwise on a default SQLAlchemy
engine built from configuration. An explicit SQLAlchemy ``Engine`` gets one
committed transaction per statement; an explicit ``Connection`` runs inside
whatever transaction its owner manages.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from logs.error_handler import log_query, report_engine_error, report_internal_error
from utils.database_utils import DatabaseConnectionError, create_sqlalchemy_engine

logger = logging.getLogger(__name__)

Link = Union[Engine, Connection]


def quote_identifier(name: str) -> str:
    """Quote a table or column name with backticks."""
    return "`" + str(name).replace("`", "``") + "`"


@dataclass
class ResultSet:
    """Buffered result of one statement.

    Attributes:
        columns: Column names (empty for statements returning no rows)
        rows: All rows as tuples
        rowcount: Rows returned, or rows affected for writes
        position: Index of the next row handed out by fetch_row/fetch_assoc
    """

    columns: List[str] = field(default_factory=list)
    rows: List[tuple] = field(default_factory=list)
    rowcount: int = 0
    position: int = 0

    @classmethod
    def from_result(cls, result) -> 'ResultSet':
        """Buffer a SQLAlchemy CursorResult."""
        if result.returns_rows:
            rows = [tuple(row) for row in result.fetchall()]
            return cls(columns=list(result.keys()), rows=rows, rowcount=len(rows))
        return cls(rowcount=result.rowcount)

    def fetch_row(self) -> Optional[tuple]:
        """Next row as a tuple, or None when exhausted."""
        if self.position >= len(self.rows):
            return None
        row = self.rows[self.position]
        self.position += 1
        return row

    def fetch_assoc(self) -> Optional[Dict[str, Any]]:
        """Next row as a column -> value dict, or None when exhausted."""
        row = self.fetch_row()
        if row is None:
            return None
        return dict(zip(self.columns, row))

    def __len__(self) -> int:
        return len(self.rows)


class BaseEngine:
    """Shared engine driver behaviour.

    Subclasses set ``name`` (registry key and configuration name), ``label``
    (prefix of engine error messages) and implement ``escape_string``.

    Attributes:
        connection: Explicit connection (SQLAlchemy Engine or Connection)
    """

    name = ''
    label = ''

    def __init__(self):
        self.connection: Optional[Link] = None
        self._default: Optional[Engine] = None

    def get_connection(self) -> Link:
        """The explicit connection, or the lazily created default engine."""
        if self.connection is not None:
            return self.connection
        if self._default is None:
            self._default = create_sqlalchemy_engine(self.name)
        return self._default

    def dispose(self) -> None:
        """Release the default engine's pooled connections."""
        if self._default is not None:
            self._default.dispose()
            self._default = None

    def escape_string(self, data: str) -> str:
        """Escape text for use inside a quoted SQL string literal."""
        raise NotImplementedError

    def query(self, sql: str) -> Optional[ResultSet]:
        """
        Execute a statement.

        Args:
            sql: Complete SQL text; it is sent as-is, with no driver-side
                parameter interpolation

        Returns:
            Buffered ResultSet, or None if the engine reported an error and
            the engine error policy does not raise
        """
        log_query(sql)
        try:
            link = self.get_connection()
            if isinstance(link, Engine):
                with link.begin() as conn:
                    return self._execute(conn, sql)
            return self._execute(link, sql)
        except (SQLAlchemyError, DatabaseConnectionError) as e:
            report_engine_error(f"{self.label}: {e}")
            return None

    @staticmethod
    def _execute(conn: Connection, sql: str) -> ResultSet:
        # no_parameters keeps literal '%' characters away from the DBAPI paramstyle
        result = conn.exec_driver_sql(sql, execution_options={'no_parameters': True})
        return ResultSet.from_result(result)

    def result_array(self, result: Optional[ResultSet]) -> List[Dict[str, Any]]:
        """All remaining rows as dicts."""
        rows = []
        if result is None:
            return rows
        row = result.fetch_assoc()
        while row is not None:
            rows.append(row)
            row = result.fetch_assoc()
        return rows

    def result_row(self, result: Optional[ResultSet]) -> Optional[Dict[str, Any]]:
        """Next row as a dict."""
        if result is None:
            return None
        return result.fetch_assoc()

    def result_value(self, result: Optional[ResultSet]) -> Any:
        """First column of the next row, or None."""
        if result is None:
            return None
        row = result.fetch_row()
        return row[0] if row else None

    def result_count(self, result: Optional[ResultSet]) -> int:
        """Number of rows in the result."""
        return len(result) if result is not None else 0

    def result_exists(self, result: Optional[ResultSet]) -> bool:
        """Whether the result holds at least one row."""
        return self.result_count(result) > 0

    def default_row(self, table: str) -> Dict[str, Any]:
        """Map every column of a table to its default value."""
        result = self.query(f"SHOW COLUMNS FROM {quote_identifier(table)}")
        return {
            column['Field']: column['Default']
            for column in self.result_array(result)
        }

    def verify_table(self, table: str) -> Optional[str]:
        """
        Check a table name against the tables the database reports.

        Returns:
            The table name if it exists; otherwise an internal error is
            reported and None returned
        """
        result = self.query("SHOW TABLES")
        row = result.fetch_row() if result is not None else None
        while row is not None:
            if row[0] == table:
                return row[0]
            row = result.fetch_row()

        report_internal_error(f"Table verification failed!: {quote_identifier(table)}")
        return None

    def verify_column(self, table: str, column: str) -> Optional[str]:
        """
        Check a column name against the columns of a table.

        Returns:
            The column name if it exists; otherwise an internal error is
            reported and None returned
        """
        result = self.query(f"SHOW COLUMNS FROM {quote_identifier(table)}")
        for real_column in self.result_array(result):
            if real_column['Field'] == column:
                return real_column['Field']

        report_internal_error(
            f"Column verification failed!: {quote_identifier(table)}.{quote_identifier(column)}"
        )
        return None
