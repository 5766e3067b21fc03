"""
=================================
SQL engine drivers and registry.
=================================

Selects the active engine driver and forwards every engine operation to it.
The active engine name lives in ``config.sql.engine``; each engine keeps its
own explicit connection, so switching engines and back restores the previous
connection.

Engines:
    mysql: MySQLEngine (PyMySQL escaping)
    odbc: ODBCEngine (backslash escaping)

Example:
    >>> import engines
    >>> from sqlalchemy import create_engine
    >>>
    >>> engines.engine_set('mysql')
    >>> engines.connection_set(create_engine('mysql+pymysql://app@db/shop'))
    >>> result = engines.query("SELECT * FROM `product`")
    >>> engines.result_array(result)
"""

import logging
from typing import Any, Dict, List, Optional

from core.config import config
from engines.base import BaseEngine, Link, ResultSet, quote_identifier
from engines.mysql import MySQLEngine
from engines.odbc import ODBCEngine

logger = logging.getLogger(__name__)

__all__ = [
    'ENGINES', 'BaseEngine', 'MySQLEngine', 'ODBCEngine', 'ResultSet',
    'quote_identifier', 'get_driver', 'engine_get', 'engine_set',
    'connection_get', 'connection_set', 'dispose_all',
    'query', 'escape_string', 'result_array', 'result_row', 'result_value',
    'result_count', 'result_exists', 'default_row', 'verify_table',
    'verify_column'
]

ENGINES = {
    'mysql': MySQLEngine,
    'odbc': ODBCEngine,
}

_drivers: Dict[str, BaseEngine] = {}


def get_driver(name: Optional[str] = None) -> BaseEngine:
    """
    Get the driver instance for an engine.

    Args:
        name: Engine name (defaults to the active engine)

    Raises:
        ValueError: For an unknown engine name
    """
    name = (name or config.sql.engine).lower()
    if name not in ENGINES:
        raise ValueError(f"Unsupported SQL engine: {name}")
    if name not in _drivers:
        _drivers[name] = ENGINES[name]()
    return _drivers[name]


def engine_get() -> str:
    """Name of the active engine."""
    return config.sql.engine


def engine_set(name: str) -> None:
    """
    Make another engine the active one.

    Raises:
        ValueError: For an unknown engine name
    """
    name = name.lower()
    if name not in ENGINES:
        raise ValueError(f"Unsupported SQL engine: {name}")
    config.sql.engine = name
    logger.info(f"SQL engine set to {name}")


def connection_get() -> Optional[Link]:
    """Explicit connection of the active engine, or None."""
    return get_driver().connection


def connection_set(connection: Optional[Link]) -> None:
    """Register an explicit connection for the active engine; a falsy value clears it."""
    get_driver().connection = connection or None


def dispose_all() -> None:
    """Dispose default engines and forget every driver and connection."""
    for driver in _drivers.values():
        driver.dispose()
    _drivers.clear()


def query(sql: str) -> Optional[ResultSet]:
    return get_driver().query(sql)


def escape_string(data: str) -> str:
    return get_driver().escape_string(data)


def result_array(result: Optional[ResultSet]) -> List[Dict[str, Any]]:
    return get_driver().result_array(result)


def result_row(result: Optional[ResultSet]) -> Optional[Dict[str, Any]]:
    return get_driver().result_row(result)


def result_value(result: Optional[ResultSet]) -> Any:
    return get_driver().result_value(result)


def result_count(result: Optional[ResultSet]) -> int:
    return get_driver().result_count(result)


def result_exists(result: Optional[ResultSet]) -> bool:
    return get_driver().result_exists(result)


def default_row(table: str) -> Dict[str, Any]:
    return get_driver().default_row(table)


def verify_table(table: str) -> Optional[str]:
    return get_driver().verify_table(table)


def verify_column(table: str, column: str) -> Optional[str]:
    return get_driver().verify_column(table, column)
