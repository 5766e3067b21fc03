"""
====================================
Date and time values for SQL columns.
====================================

Formats dates and timestamps the way MySQL DATE and DATETIME columns expect
them. ``None``, the empty string and the zero date map to the zero value
MySQL uses for "no date". The integer ``0`` is a Unix timestamp (the epoch
in local time), not "no date".

Accepted inputs:
    date / datetime objects
    Unix timestamps (int or float)
    ISO 8601 strings ('2024-03-01', '2024-03-01T12:30:00', ...)
    'now' (current time); 'today', 'yesterday', 'tomorrow' (midnight)

Example:
    >>> sql_date('2024-03-01T12:30:00')
    '2024-03-01'
    >>> sql_time(datetime(2024, 3, 1, 8, 5))
    '2024-03-01 08:05:00'
    >>> sql_time(None)
    '0000-00-00 00:00:00'
"""

from datetime import date, datetime, time, timedelta
from typing import Union

ZERO_DATE = '0000-00-00'
ZERO_DATETIME = '0000-00-00 00:00:00'

DATE_FORMAT = '%Y-%m-%d'
DATETIME_FORMAT = '%Y-%m-%d %H:%M:%S'

# Day keywords -> offset from today, resolved to midnight
KEYWORDS = {
    'today': timedelta(0),
    'yesterday': timedelta(days=-1),
    'tomorrow': timedelta(days=1),
}

Timestamp = Union[None, str, int, float, date, datetime]


def _is_zero(value: Timestamp) -> bool:
    if isinstance(value, str):
        return value.strip() in ('', ZERO_DATE, ZERO_DATETIME)
    return value is None


def to_datetime(value: Timestamp) -> datetime:
    """
    Convert any accepted input to a naive local datetime.

    Raises:
        ValueError: If a string is neither a keyword nor ISO 8601
        TypeError: For unsupported input types
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        raise TypeError(f"Unsupported timestamp type: {type(value).__name__}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value)
    if isinstance(value, str):
        text = value.strip()
        keyword = text.lower()
        if keyword == 'now':
            return datetime.now()
        if keyword in KEYWORDS:
            return datetime.combine(date.today() + KEYWORDS[keyword], time())
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Unrecognized date/time: {value!r}") from None
    raise TypeError(f"Unsupported timestamp type: {type(value).__name__}")


def sql_date(timestamp: Timestamp = 'today') -> str:
    """Format a value as ``YYYY-MM-DD`` (zero date for None or '')."""
    if _is_zero(timestamp):
        return ZERO_DATE
    return to_datetime(timestamp).strftime(DATE_FORMAT)


def sql_time(timestamp: Timestamp = 'now') -> str:
    """Format a value as ``YYYY-MM-DD HH:MM:SS`` (zero datetime for None or '')."""
    if _is_zero(timestamp):
        return ZERO_DATETIME
    return to_datetime(timestamp).strftime(DATETIME_FORMAT)
