"""
===========================================
Comprehensive pytest suite for sql/dml.py
===========================================

Sections:
---------
1. Unit tests - statement builders
2. Edge case tests - empty data

Available markers:
------------------
unit, edge_case

How to Execute:
---------------
All tests:          pytest tests/tests_sql/test_dml.py -v
"""

import pytest

from core.config import config
from logs.error_handler import QueryBuildError
from sql.clauses import id_clause, where_clause
from sql.dml import delete_statement, insert_statement, truncate_statement, update_statement

# ===============
# 1. UNIT TESTS
# ===============

@pytest.mark.unit
def test_insert_statement():
    result = insert_statement('user', {'name': "o'hara", 'age': 40, 'active': True})

    assert result == (
        "INSERT INTO `user` (`name`, `age`, `active`) "
        "VALUES ('o\\'hara', '40', '1')"
    )


@pytest.mark.unit
def test_insert_statement_none_is_empty_string():
    assert insert_statement('user', {'city': None}) == "INSERT INTO `user` (`city`) VALUES ('')"


@pytest.mark.unit
def test_update_statement():
    result = update_statement('user', {'city': 'Lyon'}, where_clause('name', 'bob'))

    assert result == "UPDATE `user` SET `city` = 'Lyon' WHERE `name` = 'bob'"


@pytest.mark.unit
def test_delete_statement():
    assert delete_statement('user', id_clause(3)) == "DELETE FROM `user` WHERE `id` = 3"


@pytest.mark.unit
def test_truncate_statement():
    assert truncate_statement('user') == "TRUNCATE `user`"


# ====================
# 2. EDGE CASE TESTS
# ====================

@pytest.mark.edge_case
def test_insert_statement_empty_data_raises():
    with pytest.raises(QueryBuildError, match="Empty data for insert into `user`"):
        insert_statement('user', {})


@pytest.mark.edge_case
def test_insert_statement_empty_data_without_raising():
    config.sql.internal_error.raise_error = False

    assert insert_statement('user', {}) == ""


@pytest.mark.edge_case
def test_update_statement_empty_data_raises():
    with pytest.raises(QueryBuildError, match="Empty data for SET clause"):
        update_statement('user', {}, id_clause(1))
