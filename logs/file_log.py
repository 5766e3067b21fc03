"""
==================================
Append-only named log files.
==================================

Writes human-readable log files into the configured log directory. Each log
is identified by a short name; the file on disk is
``<output_dir>/<prefix><name><suffix>`` (see ``core.config.LogConfig``).

Functions:
    log_line: Append one line, optionally timestamped
    log_compact: Collapse whitespace runs to single spaces, then log_line
    log_block: Append a multi-line block followed by a separator
    log_structure: Pretty-print a Python structure as a block
    log_context: Snapshot of runtime context (argv, environment, ...) as a block
    log_filename / log_filepath: Resolve a log name to a file name / path
    delete_log: Remove a log file

Every writer returns True when text reached the file and False otherwise;
I/O failures are reported through the module logger instead of raised so
that logging can never break the caller.

Example:
    >>> from logs.file_log import log_line, log_block
    >>>
    >>> log_line('signup', 'New account: alice')
    >>> log_block('report', 'line 1\\nline 2')
"""

import logging
import os
import platform
import pprint
import re
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from core.config import config

logger = logging.getLogger(__name__)

WHITESPACE_RUN = re.compile(r'\s+')

# Code letter -> (label, provider) for log_context
CONTEXT_SECTIONS = {
    'A': ('argv', lambda: list(sys.argv)),
    'E': ('environ', lambda: dict(os.environ)),
    'P': ('path', lambda: list(sys.path)),
    'S': ('process', lambda: {
        'pid': os.getpid(),
        'cwd': os.getcwd(),
        'executable': sys.executable,
        'platform': platform.platform(),
    }),
}


def log_filename(name: str) -> str:
    """Get the file name of the given log."""
    return f"{config.log.filename_prefix}{name}{config.log.filename_suffix}"


def log_filepath(name: str) -> Path:
    """Get the full path of the given log."""
    return Path(config.log.output_dir) / log_filename(name)


def timestamp() -> str:
    """Current time rendered with the configured ``time_format``."""
    return datetime.now().strftime(config.log.time_format)


def log_line(name: str, data: str, autodate: bool = True) -> bool:
    """
    Append a line of text to the given log.

    Args:
        name: Log name
        data: Text to write; a line terminator is added
        autodate: Prefix the line with the current timestamp

    Returns:
        True if the text was written
    """
    if autodate:
        data = timestamp() + data
    return _append(name, data + config.log.endl)


def log_compact(name: str, data: str, autodate: bool = True) -> bool:
    """
    Log a multi-line string as a single line.

    Every run of whitespace (newlines included) becomes one space.
    """
    return log_line(name, WHITESPACE_RUN.sub(' ', data), autodate)


def log_block(name: str, data: str, autodate: bool = True) -> bool:
    """
    Append a multi-line block of text to the given log.

    The timestamp, when requested, sits on its own line above the block and
    the block is closed with the configured ``new_block`` separator.

    Args:
        name: Log name
        data: Block text
        autodate: Put the current timestamp on the line before the block

    Returns:
        True if the block was written
    """
    endl = config.log.endl
    if autodate:
        data = timestamp() + endl + data
    return _append(name, data + endl + config.log.new_block + endl)


def log_structure(name: str, data: Any, autodate: bool = True) -> bool:
    """Log any Python structure as a pretty-printed block."""
    return log_block(name, _pretty(data), autodate)


def log_context(name: str, codes: str = 'AE', autodate: bool = True) -> bool:
    """
    Log one or more runtime context sections as a single block.

    Args:
        name: Log name
        codes: Section letters, in output order:
            A: command line arguments
            E: environment variables
            P: module search path
            S: process information (pid, cwd, executable, platform)
        autodate: Put the current timestamp on the line before the block

    Returns:
        True if the block was written; False if any letter is unknown
        (nothing is written in that case)
    """
    sections = []
    for code in codes:
        if code not in CONTEXT_SECTIONS:
            logger.warning(f"Unknown context section {code!r} in {codes!r}")
            return False
        label, provider = CONTEXT_SECTIONS[code]
        sections.append(f"{label} = {_pretty(provider())}")

    return log_block(name, config.log.endl.join(sections), autodate)


def delete_log(name: str) -> bool:
    """
    Delete the given log file.

    Returns:
        True if the file was removed, False if it did not exist
    """
    path = log_filepath(name)
    try:
        path.unlink()
    except FileNotFoundError:
        logger.debug(f"Log file not found: {path}")
        return False
    return True


def _pretty(data: Any) -> str:
    """pprint output with newlines converted to the configured terminator."""
    return pprint.pformat(data).replace('\n', config.log.endl)


def _append(name: str, data: str) -> bool:
    """Append raw text to a log file; every writer ends up here."""
    path = log_filepath(name)
    try:
        config.log.ensure_output_dir()
        # newline='' keeps the configured terminator as-is
        with open(path, 'a', encoding='utf-8', newline='') as handle:
            written = handle.write(data)
    except OSError as e:
        logger.error(f"Failed to write log file {path}: {e}")
        return False
    return written > 0

