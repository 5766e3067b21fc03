"""
=======================================
Configuration management for safesql.
=======================================

Loads all configuration from environment variables (.env file) and provides
a centralized Config singleton for application-wide access.

The configuration is grouped into:
- LogConfig: where and how the file logger writes its log files
- SqlConfig: active engine, error policies, query logging and checks
- DatabaseConfig: connection settings for the MySQL and ODBC engines

Every setting is a plain mutable attribute, so runtime changes (for example
``engines.engine_set('odbc')``) are visible to every module immediately.

Example:
    >>> from core.config import config
    >>>
    >>> # Active SQL engine
    >>> print(config.engine)
    >>>
    >>> # Disable the bare string check for a hot code path
    >>> config.sql.enable_bare_string_error = False
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

TRUTHY = ('1', 'true', 'yes', 'on')


def _env_bool(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in TRUTHY


@dataclass
class LogConfig:
    """File logger settings.

    Attributes:
        output_dir: Directory in which log files are created
        filename_prefix: Prefix added to every log file name
        filename_suffix: Suffix (extension) added to every log file name
        time_format: strftime format of the timestamp prepended to entries
        endl: Line terminator written after each entry
        new_block: Separator written after each block entry
    """

    output_dir: Path
    filename_prefix: str = 'safesql_'
    filename_suffix: str = '.txt'
    time_format: str = '[%Y-%m-%d %H:%M:%S] '
    endl: str = os.linesep
    new_block: str = '-' * 80 + os.linesep

    def ensure_output_dir(self) -> None:
        """Create the log directory if it doesn't exist (idempotent)."""
        Path(self.output_dir).mkdir(parents=True, exist_ok=True)


@dataclass
class ErrorPolicy:
    """What to do with one category of error.

    Attributes:
        log: Write the error to ``log_file`` through the file logger
        log_file: Log name (prefix and suffix are added by the file logger)
        raise_error: Raise the matching exception after logging
    """

    log: bool
    log_file: str
    raise_error: bool


@dataclass
class SqlConfig:
    """SQL helper settings.

    Attributes:
        engine: Active engine name ('mysql' or 'odbc')
        engine_error: Policy for errors reported by the database driver
        internal_error: Policy for errors detected by safesql itself
        log_queries: Log every statement sent to the database
        query_log_file: Log name used when ``log_queries`` is on
        enable_no_data_error: Reject formatted queries given no data values
        enable_bare_string_error: Reject queries containing an unquoted ``=%s``
    """

    engine: str = 'mysql'
    engine_error: ErrorPolicy = field(
        default_factory=lambda: ErrorPolicy(log=True, log_file='sql_error', raise_error=False)
    )
    internal_error: ErrorPolicy = field(
        default_factory=lambda: ErrorPolicy(log=True, log_file='sql_error', raise_error=True)
    )
    log_queries: bool = False
    query_log_file: str = 'sql_query'
    enable_no_data_error: bool = True
    enable_bare_string_error: bool = True


@dataclass
class DatabaseConfig:
    """Database connection settings.

    Attributes:
        host: MySQL server hostname or IP address
        port: MySQL server port number
        user: Database username
        password: Database password
        database: Default database name
        odbc_connect: Raw ODBC connection string used by the odbc engine
    """

    host: str
    port: int
    user: str
    password: str
    database: str
    odbc_connect: str = ''

    def get_connection_params(self) -> dict:
        """Get MySQL connection parameters as dictionary.

        Returns:
            Dictionary with keys: host, port, user, password, database
        """
        return {
            'host': self.host,
            'port': self.port,
            'user': self.user,
            'password': self.password,
            'database': self.database
        }


class Config:
    """Centralized configuration manager.

    Provides access to all configuration settings loaded from environment
    variables (.env file).

    Attributes:
        log: LogConfig instance with file logger settings
        sql: SqlConfig instance with engine and error handling settings
        db: DatabaseConfig instance with connection settings

    Properties:
        engine: Active SQL engine name
        log_dir: File logger output directory
        db_host: Database server hostname
        db_port: Database server port
        db_user: Database username
        db_password: Database password
        db_name: Default database name

    Example:
        >>> config = Config()
        >>> print(f"Logging to {config.log_dir}, engine {config.engine}")
    """

    def __init__(self):
        """Initialize configuration from environment variables."""
        project_root = Path(__file__).parent.parent

        self.log = LogConfig(
            output_dir=Path(os.getenv('SAFESQL_LOG_DIR', str(project_root / 'log'))),
            filename_prefix=os.getenv('SAFESQL_LOG_PREFIX', 'safesql_'),
            filename_suffix=os.getenv('SAFESQL_LOG_SUFFIX', '.txt'),
            time_format=os.getenv('SAFESQL_LOG_TIME_FORMAT', '[%Y-%m-%d %H:%M:%S] ')
        )

        self.sql = SqlConfig(
            engine=os.getenv('SAFESQL_ENGINE', 'mysql').lower(),
            engine_error=ErrorPolicy(
                log=_env_bool('SAFESQL_ENGINE_ERROR_LOG', True),
                log_file=os.getenv('SAFESQL_ENGINE_ERROR_FILE', 'sql_error'),
                raise_error=_env_bool('SAFESQL_ENGINE_ERROR_RAISE', False)
            ),
            internal_error=ErrorPolicy(
                log=_env_bool('SAFESQL_INTERNAL_ERROR_LOG', True),
                log_file=os.getenv('SAFESQL_INTERNAL_ERROR_FILE', 'sql_error'),
                raise_error=_env_bool('SAFESQL_INTERNAL_ERROR_RAISE', True)
            ),
            log_queries=_env_bool('SAFESQL_LOG_QUERIES', False),
            query_log_file=os.getenv('SAFESQL_QUERY_LOG_FILE', 'sql_query'),
            enable_no_data_error=_env_bool('SAFESQL_NO_DATA_ERROR', True),
            enable_bare_string_error=_env_bool('SAFESQL_BARE_STRING_ERROR', True)
        )

        self.db = DatabaseConfig(
            host=os.getenv('MYSQL_HOST', 'localhost'),
            port=int(os.getenv('MYSQL_PORT', '3306')),
            user=os.getenv('MYSQL_USER', 'root'),
            password=os.getenv('MYSQL_PASSWORD', ''),
            database=os.getenv('MYSQL_DATABASE', 'test'),
            odbc_connect=os.getenv('ODBC_CONNECT', '')
        )

    @property
    def engine(self) -> str:
        """Get the active SQL engine name."""
        return self.sql.engine

    @property
    def log_dir(self) -> Path:
        """Get the file logger output directory."""
        return Path(self.log.output_dir)

    @property
    def db_host(self) -> str:
        """Get database server hostname."""
        return self.db.host

    @property
    def db_port(self) -> int:
        """Get database server port number."""
        return self.db.port

    @property
    def db_user(self) -> str:
        """Get database username."""
        return self.db.user

    @property
    def db_password(self) -> str:
        """Get database password."""
        return self.db.password

    @property
    def db_name(self) -> str:
        """Get default database name."""
        return self.db.database

    def get_connection_params(self) -> dict:
        """Get MySQL connection parameters.

        Returns:
            Dictionary with keys: host, port, user, password, database
        """
        return self.db.get_connection_params()


# Global configuration instance
config = Config()
