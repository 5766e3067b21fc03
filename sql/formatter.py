"""
====================================
Parameterized query formatter.
====================================

Builds complete SQL strings from printf-style templates, escaping every
data value according to its placeholder type:

    %s      string: stringified, then escaped by the active engine driver;
            the template must supply the surrounding quotes ('%s')
    %d      integer: strict numeric coercion, never quoted
    %f      float: strict numeric coercion, never quoted
    %N$s    any of the above with a 1-based position (%2$s, %1$d, ...)
    %%      a literal '%'

Placeholders without a position consume values in order. The sequential
cursor only moves on positional-less placeholders, so ``%2$s`` in the middle
of a template does not shift the ones after it. ``%%`` is consumed in the
same scan, which makes ``%%s`` a literal ``%s``; substituted values are
never re-scanned.

Two checks run before substitution (each can be switched off in
``config.sql``):

    no data: a template given no values at all is rejected; it usually
        means the caller interpolated data into the string directly. Pass a
        single ``None`` to run a constant query.
    bare string: a template containing ``=%s`` (whitespace and a position
        allowed) is rejected, since the string value would end up unquoted.

Example:
    >>> from sql.formatter import make
    >>>
    >>> make("SELECT * FROM `user` WHERE `name` = '%s' AND `age` > %d", "O'Neil", "30")
    "SELECT * FROM `user` WHERE `name` = 'O\\\\'Neil' AND `age` > 30"
    >>> make("SELECT COUNT(*) FROM `user`", None)
    'SELECT COUNT(*) FROM `user`'
"""

import itertools
import math
import re
from typing import Any, Sequence

import engines
from core.config import config
from logs.error_handler import report_internal_error

PLACEHOLDER = re.compile(r'%%|%(?:(\d+)\$)?([sdf])')
BARE_STRING = re.compile(r'=\s*%(\d+\$)?s')
LEADING_NUMBER = re.compile(r'\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)')
INTEGER = re.compile(r'[+-]?\d+')

# Integral floats below this render without a fractional part
PLAIN_FLOAT_LIMIT = 1e15


def _leading_number(text: str):
    match = LEADING_NUMBER.match(text)
    return match.group(1) if match else None


def to_int(value: Any) -> int:
    """
    Coerce any value to an integer without ever failing.

    Strings contribute their leading number ("12abc" -> 12, "abc" -> 0,
    "1e3" -> 1000), floats are truncated, None is 0 and non-finite floats
    are 0.
    """
    if value is None:
        return 0
    if isinstance(value, bytes):
        value = value.decode('utf-8', errors='replace')
    if isinstance(value, str):
        number = _leading_number(value)
        if number is None:
            return 0
        if INTEGER.fullmatch(number):
            return int(number)
        value = float(number)
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def to_float(value: Any) -> float:
    """Coerce any value to a finite float without ever failing."""
    if value is None:
        return 0.0
    if isinstance(value, bytes):
        value = value.decode('utf-8', errors='replace')
    if isinstance(value, str):
        number = _leading_number(value)
        result = float(number) if number is not None else 0.0
    else:
        try:
            result = float(value)
        except (TypeError, ValueError, OverflowError):
            return 0.0
    return result if math.isfinite(result) else 0.0


def format_float(value: float) -> str:
    """Render a float as a SQL numeric literal (1.0 -> '1', 0.5 -> '0.5')."""
    if value.is_integer() and abs(value) < PLAIN_FLOAT_LIMIT:
        return str(int(value))
    return repr(value)


def to_text(value: Any) -> str:
    """Stringify a value for a string placeholder or quoted literal."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return '1' if value else ''
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, bytes):
        return value.decode('utf-8', errors='replace')
    return str(value)


def escape_value(value: Any) -> str:
    """Stringify and escape a value with the active engine driver."""
    return engines.escape_string(to_text(value))


def make(query: str, *values: Any) -> str:
    """
    Create a safe SQL string from a printf-style template.

    Args:
        query: Template using %s, %d, %f, %N$x and %% placeholders
        *values: Data for the placeholders

    Returns:
        The SQL string with every placeholder replaced

    Raises:
        QueryBuildError: When no values are given, a bare string placeholder
            is found or a placeholder has no matching value, and the internal
            error policy raises. When it does not raise, missing values are
            replaced with an empty string.
    """
    if config.sql.enable_no_data_error and not values:
        report_internal_error(f"No data! Query: {query}")

    if config.sql.enable_bare_string_error and BARE_STRING.search(query):
        report_internal_error(f"Bare string! Query: {query}")

    sequence = itertools.count()

    def substitute(match):
        if match.group(0) == '%%':
            return '%'

        position, kind = match.groups()
        index = int(position) - 1 if position is not None else next(sequence)

        if not 0 <= index < len(values):
            report_internal_error(f"SQL data replacement out of range: {query}")
            return ''

        value = values[index]
        if kind == 's':
            return escape_value(value)
        if kind == 'd':
            return str(to_int(value))
        return format_float(to_float(value))

    return PLACEHOLDER.sub(substitute, query)


def make_args(args: Sequence[Any]) -> str:
    """
    ``make`` taking the template and its values as one sequence.

    Convenient for helpers that forward a variable number of arguments.

    Example:
        >>> make_args(["SELECT * FROM `t` WHERE `id` = %d", 7])
        'SELECT * FROM `t` WHERE `id` = 7'
    """
    if not args:
        report_internal_error("No query given")
        return ''
    return make(args[0], *args[1:])
