"""
==========================
Utility Functions Package.
==========================

Database connectivity helpers shared by the engine drivers and the
command line tool.

Modules:
    database_utils: SQLAlchemy engine creation and health checks
"""

__version__ = "0.1.0"
__all__ = [
    'DatabaseConnectionError',
    'check_database_available',
    'create_sqlalchemy_engine',
    'get_connection_string',
    'get_database_connection_info',
    'wait_for_database'
]

from .database_utils import (
    DatabaseConnectionError,
    check_database_available,
    create_sqlalchemy_engine,
    get_connection_string,
    get_database_connection_info,
    wait_for_database,
)
