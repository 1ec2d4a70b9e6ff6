# =============================================================================
# File:        tests/test_query_builder_sqlite.py
# Purpose:     QueryBuilder nad pravim SQLite fajlom (CRUD, fetch shape, greške)
# =============================================================================
import pytest

from easyqb.db.query import QueryExecutionError
from easyqb.managers.error_manager import ErrorManager
from easyqb.managers.log_manager import LogManager


def _ages(qb):
    rows = qb.select("id", "age").from_("users").get_results()
    return {r["id"]: r["age"] for r in rows}


def test_select_all_rows(sqlite_qb):
    rows = sqlite_qb.select("id", "name").from_("users").get_results()
    assert sorted(rows, key=lambda r: r["id"]) == [
        {"id": 1, "name": "Ana"},
        {"id": 2, "name": "Boris"},
        {"id": 3, "name": "Ceca"},
    ]
    assert sqlite_qb.last_row_count == 3


def test_select_where_operator(sqlite_qb):
    rows = sqlite_qb.select(["name"]).from_("users").where("age", ">=", 27).get_results()
    assert {r["name"] for r in rows} == {"Ana", "Ceca"}


def test_get_result_shapes(sqlite_qb):
    sqlite_qb.select().from_("users").where("id", "=", 2)

    assert sqlite_qb.get_result() == {"id": 2, "name": "Boris", "age": 25}
    assert sqlite_qb.get_result("num") == (2, "Boris", 25)
    assert sqlite_qb.get_result("obj").name == "Boris"

    both = sqlite_qb.get_result("both")
    assert both[0] == 2
    assert both["name"] == "Boris"


def test_get_result_none_when_missing(sqlite_qb):
    assert sqlite_qb.select().from_("users").where("id", "=", 99).get_result() is None
    assert sqlite_qb.last_row_count == 0


def test_exists(sqlite_qb):
    assert sqlite_qb.select("id").from_("users").where("name", "=", "Ana").exists() == 1
    assert sqlite_qb.select("id").from_("users").where("id", ">", 100).exists() == 0
    assert sqlite_qb.select().from_("users").exists() == 3


def test_update_then_read_back(sqlite_qb):
    assert sqlite_qb.update("users").set({"age": 31}).where("id", "=", 1) == 1
    assert _ages(sqlite_qb)[1] == 31


def test_update_where_on_same_column(sqlite_qb):
    assert sqlite_qb.update("users").set({"name": "Anna"}).where("name", "=", "Ana") == 1
    row = sqlite_qb.select("name").from_("users").where("id", "=", 1).get_result()
    assert row == {"name": "Anna"}


def test_delete(sqlite_qb):
    assert sqlite_qb.delete("users").where("id", "<", 3) == 2
    assert sqlite_qb.select().from_("users").exists() == 1


def test_insert_duplicate_key_raises(sqlite_qb):
    with pytest.raises(QueryExecutionError):
        sqlite_qb.insert("users").set({"id": 1, "name": "Dup"})
    assert "UNIQUE" in sqlite_qb.get_error()


def test_missing_table_is_reported(sqlite_qb):
    with pytest.raises(QueryExecutionError) as info:
        sqlite_qb.select().from_("missing").get_results()
    assert "no such table" in str(info.value)
    assert "no such table" in sqlite_qb.get_error()

    assert ErrorManager.read() is info.value.__cause__
    level, message = LogManager.read(last_only=True, level="ERROR")
    assert level == "ERROR"
    assert "no such table" in message


def test_incomplete_insert_fails(sqlite_qb):
    with pytest.raises(QueryExecutionError):
        sqlite_qb.insert("users").execute()


def test_builder_reused_after_error(sqlite_qb):
    with pytest.raises(QueryExecutionError):
        sqlite_qb.select().from_("missing").get_results()
    assert sqlite_qb.select().from_("users").exists() == 3
    assert sqlite_qb.get_error() is None


def test_debug_log_lists_sql(sqlite_qb, log_file, monkeypatch):
    monkeypatch.setenv("LOG_DEBUG", "1")
    sqlite_qb.select("id").from_("users").where("id", "=", 3).get_result()
    text = log_file.read_text(encoding="utf-8")
    assert "[DEBUG]" in text
    assert "SELECT id FROM tst_users WHERE id =:id" in text
