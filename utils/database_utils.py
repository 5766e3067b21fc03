"""
=====================================
Database connectivity utilities.
=====================================

Provides reusable connection helpers and availability checks for the two
supported engines:

    mysql: MySQL through SQLAlchemy's ``mysql+pymysql`` dialect
    odbc: an ODBC data source through SQLAlchemy's ``mysql+pyodbc`` dialect,
        configured with a raw ODBC connection string

The engine drivers in ``engines`` call ``create_sqlalchemy_engine`` when no
explicit connection has been registered with ``engines.connection_set``.

Example:
    >>> from utils.database_utils import (
    ...     check_database_available,
    ...     wait_for_database,
    ...     get_connection_string
    ... )
    >>>
    >>> if check_database_available():
    ...     print("Database ready")
    >>>
    >>> wait_for_database(max_retries=5)
    >>>
    >>> conn_str = get_connection_string('mysql')
"""

import logging
import time
from typing import Optional
from urllib.parse import quote_plus

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError

from core.config import config

logger = logging.getLogger(__name__)

DRIVERNAMES = {
    'mysql': 'mysql+pymysql',
    'odbc': 'mysql+pyodbc',
}

# Name of the connect timeout argument for each DBAPI driver
TIMEOUT_ARGS = {
    'mysql': 'connect_timeout',
    'odbc': 'timeout',
}


class DatabaseConnectionError(Exception):
    """Exception raised when database connection fails."""
    pass


def _engine_name(engine_name: Optional[str]) -> str:
    """Resolve and validate an engine name (defaults to the active one)."""
    name = (engine_name or config.engine).lower()
    if name not in DRIVERNAMES:
        raise ValueError(f"Unsupported SQL engine: {name}")
    return name


def _odbc_connect(odbc_connect: Optional[str]) -> str:
    dsn = odbc_connect if odbc_connect is not None else config.db.odbc_connect
    if not dsn:
        raise DatabaseConnectionError("ODBC connection string is not configured (ODBC_CONNECT)")
    return dsn


def get_connection_string(
    engine_name: Optional[str] = None,
    host: str = None,
    port: int = None,
    user: str = None,
    password: str = None,
    database: str = None,
    odbc_connect: str = None
) -> str:
    """
    Build a SQLAlchemy connection string for an engine.

    Args:
        engine_name: 'mysql' or 'odbc' (defaults to the active engine)
        host: Database hostname (defaults to config.db_host)
        port: Database port (defaults to config.db_port)
        user: Database user (defaults to config.db_user)
        password: Database password (defaults to config.db_password)
        database: Database name (defaults to config.db_name)
        odbc_connect: Raw ODBC connection string (defaults to config)

    Returns:
        SQLAlchemy connection string

    Raises:
        ValueError: For an unknown engine name
        DatabaseConnectionError: If the odbc engine has no connection string

    Example:
        >>> get_connection_string('mysql')
        'mysql+pymysql://root:@localhost:3306/test'
    """
    name = _engine_name(engine_name)

    if name == 'odbc':
        return f"{DRIVERNAMES[name]}:///?odbc_connect={quote_plus(_odbc_connect(odbc_connect))}"

    host = host if host is not None else config.db_host
    port = port if port is not None else config.db_port
    user = user if user is not None else config.db_user
    password = password if password is not None else config.db_password
    database = database if database is not None else config.db_name

    return f"{DRIVERNAMES[name]}://{quote_plus(user)}:{quote_plus(password)}@{host}:{port}/{database}"


def create_sqlalchemy_engine(
    engine_name: Optional[str] = None,
    echo: bool = False,
    pool_size: int = 5,
    max_overflow: int = 10,
    connect_args: Optional[dict] = None
) -> Engine:
    """
    Create a SQLAlchemy engine for an engine name from configuration.

    Args:
        engine_name: 'mysql' or 'odbc' (defaults to the active engine)
        echo: Enable SQL statement logging
        pool_size: Connection pool size
        max_overflow: Maximum overflow connections
        connect_args: Extra DBAPI connect() arguments

    Returns:
        Configured SQLAlchemy Engine

    Example:
        >>> engine = create_sqlalchemy_engine('mysql')
        >>> with engine.connect() as conn:
        ...     conn.execute(text("SELECT 1"))
    """
    name = _engine_name(engine_name)

    if name == 'odbc':
        connection_url = URL.create(
            drivername=DRIVERNAMES[name],
            query={'odbc_connect': _odbc_connect(None)}
        )
    else:
        connection_url = URL.create(
            drivername=DRIVERNAMES[name],
            username=config.db_user,
            password=config.db_password,
            host=config.db_host,
            port=config.db_port,
            database=config.db_name
        )

    logger.debug(f"Creating {name} engine")
    return create_engine(
        connection_url,
        echo=echo,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,  # Verify connections before using
        connect_args=connect_args or {}
    )


def check_database_available(engine_name: Optional[str] = None, timeout: int = 5) -> bool:
    """
    Check if the configured database answers a trivial query.

    Args:
        engine_name: 'mysql' or 'odbc' (defaults to the active engine)
        timeout: Connection timeout in seconds

    Returns:
        True if database is available, False otherwise
    """
    name = _engine_name(engine_name)
    engine = None
    try:
        engine = create_sqlalchemy_engine(name, connect_args={TIMEOUT_ARGS[name]: timeout})
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except (SQLAlchemyError, DatabaseConnectionError) as e:
        logger.debug(f"Database not available: {e}")
        return False
    finally:
        if engine is not None:
            engine.dispose()


def wait_for_database(
    engine_name: Optional[str] = None,
    max_retries: int = 10,
    retry_delay: int = 2,
    timeout: int = 5
) -> bool:
    """
    Wait for the database to become available with retries.

    Args:
        engine_name: 'mysql' or 'odbc' (defaults to the active engine)
        max_retries: Maximum number of retry attempts
        retry_delay: Delay between retries in seconds
        timeout: Connection timeout per attempt in seconds

    Returns:
        True once the database is available

    Raises:
        DatabaseConnectionError: If database never becomes available
    """
    name = _engine_name(engine_name)
    target = describe_target(name)

    logger.info(f"Waiting for {target}...")

    for attempt in range(1, max_retries + 1):
        if check_database_available(name, timeout):
            logger.info(f"✅ {target} is available (attempt {attempt}/{max_retries})")
            return True

        if attempt < max_retries:
            logger.warning(
                f"⏳ {target} not available yet (attempt {attempt}/{max_retries}), "
                f"retrying in {retry_delay}s..."
            )
            time.sleep(retry_delay)

    error_msg = f"{target} did not become available after {max_retries} attempts"
    logger.error(f"❌ {error_msg}")
    raise DatabaseConnectionError(error_msg)


def describe_target(engine_name: Optional[str] = None) -> str:
    """Short human-readable description of where an engine connects."""
    name = _engine_name(engine_name)
    if name == 'odbc':
        return "ODBC data source"
    return f"MySQL at {config.db_host}:{config.db_port}/{config.db_name}"


def get_database_connection_info() -> dict:
    """
    Get current database connection configuration.

    The password and ODBC connection string are not included.

    Returns:
        Dictionary with connection parameters
    """
    return {
        'engine': config.engine,
        'host': config.db_host,
        'port': config.db_port,
        'user': config.db_user,
        'database': config.db_name,
        'odbc_configured': bool(config.db.odbc_connect)
    }
