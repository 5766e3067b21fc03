"""ODBC engine driver (SQLAlchemy ``mysql+pyodbc``)."""

from engines.base import BaseEngine

# Backslash, both quote characters and NUL get a backslash prefix
SLASHES = {
    ord('\\'): '\\\\',
    ord("'"): "\\'",
    ord('"'): '\\"',
    0: '\\0',
}


class ODBCEngine(BaseEngine):
    """ODBC driver.

    ODBC offers no escaping call of its own, so string data is escaped by
    backslash-prefixing the characters that can end or corrupt a literal.
    """

    name = 'odbc'
    label = 'ODBC'

    def escape_string(self, data: str) -> str:
        return data.translate(SLASHES)
