"""
=======================================
Logging and error reporting for safesql.
=======================================

This package provides the append-only file logger used both directly by
applications and internally for the SQL query log and SQL error log, plus
the error reporting policy shared by the SQL modules.

Modules:
    file_log: Named log files (lines, compacted lines, blocks, structures)
    error_handler: Error categories, policies and exceptions

Example:
    >>> from logs.file_log import log_line, log_structure
    >>> from logs.error_handler import QueryBuildError
    >>>
    >>> log_line('import', 'Imported 120 rows')
    >>> log_structure('import', {'rows': 120, 'skipped': 3})
"""

__version__ = "0.1.0"
__all__ = [
    'log_line', 'log_compact', 'log_block', 'log_structure', 'log_context',
    'log_filename', 'log_filepath', 'delete_log',
    'SafeSqlError', 'QueryBuildError', 'EngineError'
]

from .error_handler import EngineError, QueryBuildError, SafeSqlError
from .file_log import (
    delete_log,
    log_block,
    log_compact,
    log_context,
    log_filename,
    log_filepath,
    log_line,
    log_structure,
)
