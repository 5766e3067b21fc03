"""
===============================================
Comprehensive pytest suite for sql/queries.py
===============================================

Runs every read helper against an in-memory SQLite database registered as
the explicit connection of a test engine (see ``sqlite_db`` in conftest).

Sections:
---------
1. Integration tests - run_* and fetch_<type>_<condition> helpers
2. Edge case tests - empty results and engine errors

Available markers:
------------------
integration, edge_case

How to Execute:
---------------
All tests:          pytest tests/tests_sql/test_queries.py -v
"""

import pytest

from core.config import config
from logs.error_handler import EngineError
from logs.file_log import log_filepath
from sql import queries

# ======================
# 1. INTEGRATION TESTS
# ======================

@pytest.mark.integration
def test_run_returns_buffered_result(sqlite_db):
    result = queries.run("SELECT `name` FROM `user` WHERE `city` = '%s'", "Paris")

    assert result.columns == ['name']
    assert len(result) == 2


@pytest.mark.integration
def test_fetch_array_template(sqlite_db):
    rows = queries.fetch_array(
        "SELECT `name`, `age` FROM `user` WHERE `age` > %d ORDER BY `age`", "30"
    )

    assert rows == [
        {'name': 'alice', 'age': 31},
        {'name': "d'arcy", 'age': 38},
        {'name': 'carol', 'age': 47},
    ]


@pytest.mark.integration
def test_fetch_array_all_sorted(sqlite_db):
    rows = queries.fetch_array_all('user', sort={'name': 'desc'})

    assert [row['name'] for row in rows] == ["d'arcy", 'carol', 'bob', 'alice']


@pytest.mark.integration
def test_fetch_array_where(sqlite_db):
    rows = queries.fetch_array_where('user', 'city', 'Paris', sort='age')

    assert [row['name'] for row in rows] == ['alice', 'carol']


@pytest.mark.integration
def test_fetch_array_where_multiple_columns(sqlite_db):
    rows = queries.fetch_array_where('user', {'city': 'Paris', 'name': 'carol'})

    assert len(rows) == 1
    assert rows[0]['age'] == 47


@pytest.mark.integration
def test_fetch_array_like(sqlite_db):
    rows = queries.fetch_array_like('user', 'name', '%r%', sort='name')

    assert [row['name'] for row in rows] == ['carol', "d'arcy"]


@pytest.mark.integration
def test_fetch_array_id(sqlite_db):
    rows = queries.fetch_array_id('user', 2)

    assert rows == [{'id': 2, 'name': 'bob', 'city': 'Lyon', 'age': 25}]


@pytest.mark.integration
def test_fetch_row_helpers(sqlite_db):
    assert queries.fetch_row("SELECT * FROM `user` WHERE `id` = %d", 1)['name'] == 'alice'
    assert queries.fetch_row_all('user', sort={'age': 'desc'})['name'] == 'carol'
    assert queries.fetch_row_where('user', 'name', "d'arcy")['city'] == 'Nice'
    assert queries.fetch_row_like('user', 'city', 'Ly%')['name'] == 'bob'
    assert queries.fetch_row_id('user', '3')['name'] == 'carol'


@pytest.mark.integration
def test_fetch_value_helpers(sqlite_db):
    assert queries.fetch_value("SELECT COUNT(*) FROM `user`", None) == 4
    assert queries.fetch_value_all('user', sort='id') == 1
    assert queries.fetch_value_where('user', 'name', 'bob') == 2
    assert queries.fetch_value_like('user', 'name', 'car%') == 3
    assert queries.fetch_value_id('user', 4) == 4


@pytest.mark.integration
def test_fetch_count_helpers(sqlite_db):
    assert queries.fetch_count("SELECT * FROM `user` WHERE `age` < %d", 40) == 3
    assert queries.fetch_count_all('user') == 4
    assert queries.fetch_count_where('user', 'city', 'Paris') == 2
    assert queries.fetch_count_like('user', 'name', '%a%') == 3
    assert queries.fetch_count_id('user', 9) == 0


@pytest.mark.integration
def test_fetch_exists_helpers(sqlite_db):
    assert queries.fetch_exists("SELECT * FROM `user` WHERE `name` = '%s'", "bob") is True
    assert queries.fetch_exists_all('user') is True
    assert queries.fetch_exists_where('user', 'city', 'Berlin') is False
    assert queries.fetch_exists_like('user', 'city', 'N%') is True
    assert queries.fetch_exists_id('user', 0) is False


@pytest.mark.integration
def test_quote_in_value_matches_stored_row(sqlite_db):
    """Escaped quotes reach the database as data, not as SQL."""
    assert queries.fetch_count_where('user', 'name', "d'arcy") == 1
    assert queries.fetch_count_where('user', 'name', "x' OR '1'='1") == 0


@pytest.mark.integration
def test_queries_are_logged_when_enabled(sqlite_db):
    config.sql.log_queries = True

    queries.fetch_array_id('user', 1)

    content = log_filepath('sql_query').read_text()
    assert "SELECT * FROM `user` WHERE `id` = 1" in content


# ====================
# 2. EDGE CASE TESTS
# ====================

@pytest.mark.edge_case
def test_empty_results(sqlite_db):
    assert queries.fetch_array_where('user', 'city', 'Berlin') == []
    assert queries.fetch_row_where('user', 'city', 'Berlin') is None
    assert queries.fetch_value_where('user', 'city', 'Berlin') is None
    assert queries.fetch_count_where('user', 'city', 'Berlin') == 0


@pytest.mark.edge_case
def test_engine_error_returns_empty_values_and_logs(sqlite_db):
    assert queries.run_all('missing_table') is None
    assert queries.fetch_array_all('missing_table') == []
    assert queries.fetch_row_all('missing_table') is None
    assert queries.fetch_value_all('missing_table') is None
    assert queries.fetch_count_all('missing_table') == 0
    assert queries.fetch_exists_all('missing_table') is False

    content = log_filepath('sql_error').read_text()
    assert "SQLite:" in content
    assert "missing_table" in content


@pytest.mark.edge_case
def test_engine_error_raises_when_policy_says_so(sqlite_db):
    config.sql.engine_error.raise_error = True

    with pytest.raises(EngineError, match="SQLite:"):
        queries.fetch_array_all('missing_table')


@pytest.mark.edge_case
def test_percent_in_query_text_reaches_database_unchanged(sqlite_db):
    rows = queries.fetch_array("SELECT `name` FROM `user` WHERE `name` LIKE '%%o%%'", None)

    assert [row['name'] for row in rows] == ['bob', 'carol']
