"""
==============================================
Comprehensive pytest suite for core/config.py
==============================================

Sections:
---------
1. Unit tests - defaults and environment overrides
2. Edge case tests - boolean flags and log directory creation

Available markers:
------------------
unit, edge_case

How to Execute:
---------------
All tests:          pytest tests/tests_core/test_config.py -v
"""

from pathlib import Path

import pytest

from core.config import Config, ErrorPolicy, LogConfig, SqlConfig, _env_bool

ENV_VARS = [
    'SAFESQL_LOG_DIR', 'SAFESQL_LOG_PREFIX', 'SAFESQL_LOG_SUFFIX', 'SAFESQL_LOG_TIME_FORMAT',
    'SAFESQL_ENGINE', 'SAFESQL_ENGINE_ERROR_LOG', 'SAFESQL_ENGINE_ERROR_FILE',
    'SAFESQL_ENGINE_ERROR_RAISE', 'SAFESQL_INTERNAL_ERROR_LOG', 'SAFESQL_INTERNAL_ERROR_FILE',
    'SAFESQL_INTERNAL_ERROR_RAISE', 'SAFESQL_LOG_QUERIES', 'SAFESQL_QUERY_LOG_FILE',
    'SAFESQL_NO_DATA_ERROR', 'SAFESQL_BARE_STRING_ERROR',
    'MYSQL_HOST', 'MYSQL_PORT', 'MYSQL_USER', 'MYSQL_PASSWORD', 'MYSQL_DATABASE', 'ODBC_CONNECT',
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every configuration variable from the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# ===============
# 1. UNIT TESTS
# ===============

@pytest.mark.unit
def test_defaults(clean_env):
    cfg = Config()

    assert cfg.engine == 'mysql'
    assert cfg.log_dir.resolve() == (Path(__file__).parent.parent.parent / 'log').resolve()
    assert cfg.log.filename_prefix == 'safesql_'
    assert cfg.log.filename_suffix == '.txt'
    assert cfg.sql.engine_error == ErrorPolicy(log=True, log_file='sql_error', raise_error=False)
    assert cfg.sql.internal_error == ErrorPolicy(log=True, log_file='sql_error', raise_error=True)
    assert cfg.sql.log_queries is False
    assert cfg.sql.enable_no_data_error is True
    assert cfg.sql.enable_bare_string_error is True


@pytest.mark.unit
def test_database_defaults(clean_env):
    cfg = Config()

    assert cfg.get_connection_params() == {
        'host': 'localhost',
        'port': 3306,
        'user': 'root',
        'password': '',
        'database': 'test'
    }
    assert cfg.db.odbc_connect == ''


@pytest.mark.unit
def test_environment_overrides(clean_env, tmp_path):
    clean_env.setenv('SAFESQL_LOG_DIR', str(tmp_path))
    clean_env.setenv('SAFESQL_LOG_PREFIX', 'app_')
    clean_env.setenv('SAFESQL_ENGINE', 'ODBC')
    clean_env.setenv('SAFESQL_ENGINE_ERROR_RAISE', 'yes')
    clean_env.setenv('SAFESQL_INTERNAL_ERROR_LOG', 'off')
    clean_env.setenv('SAFESQL_LOG_QUERIES', 'true')
    clean_env.setenv('SAFESQL_QUERY_LOG_FILE', 'queries')
    clean_env.setenv('MYSQL_PORT', '3307')
    clean_env.setenv('ODBC_CONNECT', 'DSN=shop')

    cfg = Config()

    assert cfg.log_dir == tmp_path
    assert cfg.log.filename_prefix == 'app_'
    assert cfg.engine == 'odbc'
    assert cfg.sql.engine_error.raise_error is True
    assert cfg.sql.internal_error.log is False
    assert cfg.sql.log_queries is True
    assert cfg.sql.query_log_file == 'queries'
    assert cfg.db_port == 3307
    assert cfg.db.odbc_connect == 'DSN=shop'


@pytest.mark.unit
def test_sql_config_instances_do_not_share_policies():
    first = SqlConfig()
    second = SqlConfig()
    first.internal_error.raise_error = False

    assert second.internal_error.raise_error is True


# ====================
# 2. EDGE CASE TESTS
# ====================

@pytest.mark.edge_case
@pytest.mark.parametrize("raw, expected", [
    ("1", True),
    ("TRUE", True),
    (" on ", True),
    ("0", False),
    ("no", False),
    ("", False),
])
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv('SAFESQL_FLAG', raw)

    assert _env_bool('SAFESQL_FLAG', not expected) is expected


@pytest.mark.edge_case
def test_env_bool_default(monkeypatch):
    monkeypatch.delenv('SAFESQL_FLAG', raising=False)

    assert _env_bool('SAFESQL_FLAG', True) is True


@pytest.mark.edge_case
def test_ensure_output_dir_is_idempotent(tmp_path):
    log_config = LogConfig(output_dir=tmp_path / 'a' / 'b')

    log_config.ensure_output_dir()
    log_config.ensure_output_dir()

    assert (tmp_path / 'a' / 'b').is_dir()
