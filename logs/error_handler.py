"""
=====================================
Error handling for SQL operations.
=====================================

Central place where safesql reports problems. Two categories exist, each
with its own ``core.config.ErrorPolicy``:

    engine_error: reported by the database driver (syntax errors, lost
        connections, missing tables, ...)
    internal_error: detected by safesql itself (no data values, bare string
        placeholders, out-of-range placeholders, invalid clause input, failed
        table/column verification, ...)

For each error the policy decides whether it is written to a log file (with
the compacted file logger, including a trace of the calling frames) and
whether the matching exception is raised. When the policy does not raise,
the caller carries on with a neutral value (an empty substitution, a
``None`` result).

Classes:
    SafeSqlError: Base exception for the library
    QueryBuildError: Raised for internal errors
    EngineError: Raised for engine errors

Example:
    >>> from logs.error_handler import report_internal_error, QueryBuildError
    >>>
    >>> try:
    ...     report_internal_error("No data! Query: SELECT 1")
    ... except QueryBuildError as e:
    ...     print(f"Rejected: {e}")
"""

import logging
import os
import traceback

from core.config import ErrorPolicy, config
from logs.file_log import log_compact

logger = logging.getLogger(__name__)

ENGINE_ERROR = 'engine_error'
INTERNAL_ERROR = 'internal_error'


class SafeSqlError(Exception):
    """Base exception for safesql errors."""
    pass


class QueryBuildError(SafeSqlError):
    """Exception raised for errors detected by safesql itself.

    Raised when a query cannot be built safely: missing data values, bare
    string placeholders, out-of-range placeholders, invalid clause input or
    failed table/column verification.
    """
    pass


class EngineError(SafeSqlError):
    """Exception raised for errors reported by the database engine."""
    pass


EXCEPTIONS = {
    ENGINE_ERROR: EngineError,
    INTERNAL_ERROR: QueryBuildError,
}


def _policy(kind: str) -> ErrorPolicy:
    """Get the configured policy for an error category."""
    if kind not in EXCEPTIONS:
        raise ValueError(f"Unknown error category: {kind}")
    return getattr(config.sql, kind)


def call_trace(skip: int = 1) -> str:
    """
    Describe the current call stack as ``[file#line: function]`` entries.

    Entries are innermost first; the frames of this module are left out.

    Args:
        skip: Number of innermost frames to drop (this function itself)

    Returns:
        Trace string with a leading space, e.g.
        ``" [app.py#12: load_user][app.py#30: main]"``
    """
    frames = traceback.extract_stack()[:-skip]
    here = os.path.abspath(__file__)
    entries = [
        f"[{frame.filename}#{frame.lineno}: {frame.name}]"
        for frame in reversed(frames)
        if os.path.abspath(frame.filename) != here
    ]
    return " " + "".join(entries)


def handle_error(kind: str, message: str) -> None:
    """
    Log and/or raise an error according to its category's policy.

    Args:
        kind: ENGINE_ERROR or INTERNAL_ERROR
        message: Human-readable description of the problem

    Raises:
        EngineError: For engine errors when the policy raises
        QueryBuildError: For internal errors when the policy raises
        ValueError: For an unknown category
    """
    policy = _policy(kind)
    logger.error(f"❌ {message}")

    if policy.log:
        log_compact(policy.log_file, message + call_trace())

    if policy.raise_error:
        raise EXCEPTIONS[kind](message)


def report_engine_error(message: str) -> None:
    """Handle an error reported by the database engine."""
    handle_error(ENGINE_ERROR, message)


def report_internal_error(message: str) -> None:
    """Handle an error detected by safesql itself."""
    handle_error(INTERNAL_ERROR, message)


def log_query(sql: str) -> None:
    """Write a statement to the query log when query logging is on."""
    logger.debug(f"SQL: {sql}")
    if config.sql.log_queries:
        log_compact(config.sql.query_log_file, sql)
