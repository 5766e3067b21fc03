"""
Shared pytest configuration and fixtures for all tests.

Key fixtures:
- isolated_config (autouse): fresh SQL settings and a temporary log directory
  for every test, and no engine drivers or connections left behind.
- log_dir: the temporary log directory.
- sqlite_db: in-memory SQLite database registered as the explicit connection
  of a test engine, seeded with a small `user` table.
"""

import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

# Add project root to sys.path to enable importing project modules
# This allows tests to import from 'core', 'sql', 'engines', etc. without installation
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import engines  # noqa: E402
from core.config import LogConfig, SqlConfig, config  # noqa: E402
from engines.base import BaseEngine  # noqa: E402

USERS = [
    ('alice', 'Paris', 31),
    ('bob', 'Lyon', 25),
    ('carol', 'Paris', 47),
    ("d'arcy", 'Nice', 38),
]


def pytest_configure(config):
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: Unit tests - isolated function-level tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interactions")
    config.addinivalue_line("markers", "smoke: Smoke tests - basic functionality checks")
    config.addinivalue_line("markers", "edge_case: Edge case tests - boundary conditions")


class SQLiteTestEngine(BaseEngine):
    """Engine driver for SQLite; quotes are escaped by doubling."""

    name = 'sqlite'
    label = 'SQLite'

    def escape_string(self, data: str) -> str:
        return data.replace("'", "''")


@pytest.fixture
def log_dir(tmp_path):
    """Temporary log directory used by the file logger."""
    return tmp_path / 'log'


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, log_dir):
    """Default SQL settings and a temporary log directory for every test."""
    monkeypatch.setattr(config, 'sql', SqlConfig())
    monkeypatch.setattr(config, 'log', LogConfig(output_dir=log_dir, endl='\n', new_block='-' * 80 + '\n'))
    engines.dispose_all()
    yield config
    engines.dispose_all()


@pytest.fixture
def sqlite_db(monkeypatch):
    """
    In-memory SQLite database wired in as the active engine's connection.

    Yields the SQLAlchemy engine so tests can inspect the data directly.
    """
    monkeypatch.setitem(engines.ENGINES, 'sqlite', SQLiteTestEngine)
    engines.engine_set('sqlite')

    db = create_engine(
        'sqlite://',
        poolclass=StaticPool,
        connect_args={'check_same_thread': False}
    )
    with db.begin() as conn:
        conn.exec_driver_sql(
            "CREATE TABLE `user` ("
            "`id` INTEGER PRIMARY KEY AUTOINCREMENT, "
            "`name` TEXT, `city` TEXT, `age` INTEGER)"
        )
        for name, city, age in USERS:
            conn.exec_driver_sql(
                "INSERT INTO `user` (`name`, `city`, `age`) VALUES (?, ?, ?)",
                (name, city, age)
            )

    engines.connection_set(db)
    yield db
    db.dispose()
