"""MySQL engine driver (SQLAlchemy ``mysql+pymysql``)."""

from pymysql.converters import escape_string

from engines.base import BaseEngine


class MySQLEngine(BaseEngine):
    """MySQL driver; escaping follows MySQL's backslash escape rules."""

    name = 'mysql'
    label = 'MySQL'

    def escape_string(self, data: str) -> str:
        return escape_string(data)
