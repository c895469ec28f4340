"""Tests for the Database facade: build_query() and skip()."""

import logging
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock, patch

import pytest

from sqltpl import (
    SKIP,
    Database,
    EmptyArrayValueError,
    EmptyTemplateError,
    MissingArgumentError,
    QueryBuildError,
    UnexpectedSkipError,
)


@pytest.fixture
def db() -> Database:
    return Database()


class TestBuildQuery:
    def test_no_placeholders(self, db):
        assert db.build_query("SELECT name FROM users WHERE user_id = 1") == (
            "SELECT name FROM users WHERE user_id = 1"
        )

    def test_string_placeholder(self, db):
        assert db.build_query("SELECT * FROM users WHERE name = ? AND block = 0", ["Jack"]) == (
            "SELECT * FROM users WHERE name = 'Jack' AND block = 0"
        )

    def test_identifiers_and_ints(self, db):
        result = db.build_query(
            "SELECT ?# FROM users WHERE user_id = ?d AND block = ?d",
            [["name", "email"], 2, True],
        )
        assert result == "SELECT `name`, `email` FROM users WHERE user_id = 2 AND block = 1"

    def test_update_set(self, db):
        result = db.build_query(
            "UPDATE users SET ?a WHERE user_id = -1",
            [{"name": "Jack", "email": None}],
        )
        assert result == "UPDATE users SET `name` = 'Jack', `email` = NULL WHERE user_id = -1"

    def test_block_skipped(self, db):
        result = db.build_query(
            "SELECT name FROM users WHERE ?# IN (?a){ AND block = ?d}",
            ["user_id", [1, 2, 3], db.skip()],
        )
        assert result == "SELECT name FROM users WHERE `user_id` IN (1, 2, 3)"

    def test_block_kept(self, db):
        result = db.build_query(
            "SELECT name FROM users WHERE ?# IN (?a){ AND block = ?d}",
            ["user_id", [1, 2, 3], True],
        )
        assert result == "SELECT name FROM users WHERE `user_id` IN (1, 2, 3) AND block = 1"

    def test_skip_block_trailing_space_kept(self, db):
        assert db.build_query("SELECT * FROM t {WHERE id = ?d}", [db.skip()]) == "SELECT * FROM t "
        assert db.build_query("SELECT * FROM t {WHERE id = ?d}", [7]) == (
            "SELECT * FROM t WHERE id = 7"
        )

    def test_default_args(self, db):
        assert db.build_query("SELECT 1") == "SELECT 1"
        assert db.build_query("SELECT 1", None) == "SELECT 1"

    def test_tuple_args(self, db):
        assert db.build_query("?d, ?s", (1, "x")) == "1, 'x'"

    def test_magic_string_is_not_skip(self, db):
        assert db.build_query("a{ = ?s}", ["SKIP_THIS_BLOCK"]) == "a = 'SKIP_THIS_BLOCK'"


class TestBuildQueryErrors:
    @pytest.mark.parametrize("template", ["", "   ", "\n\t"])
    def test_empty_template(self, db, template):
        with pytest.raises(EmptyTemplateError, match="cannot be empty"):
            db.build_query(template, [])

    def test_missing_argument(self, db):
        with pytest.raises(MissingArgumentError, match="index 0"):
            db.build_query("?d", [])

    def test_empty_array(self, db):
        with pytest.raises(EmptyArrayValueError):
            db.build_query("WHERE id IN (?a)", [[]])

    def test_unexpected_skip(self, db):
        with pytest.raises(UnexpectedSkipError):
            db.build_query("WHERE id = ?d", [db.skip()])

    def test_errors_are_value_errors(self, db):
        with pytest.raises(ValueError):
            db.build_query("?d", [])
        assert issubclass(MissingArgumentError, QueryBuildError)

    def test_empty_template_logged_at_debug(self, db, caplog):
        with caplog.at_level(logging.DEBUG, logger="sqltpl.database"):
            with pytest.raises(EmptyTemplateError):
                db.build_query("  ", [])
        assert "Query build failed" in caplog.text

    def test_cast_overflow_is_build_error(self, db, caplog):
        with caplog.at_level(logging.DEBUG, logger="sqltpl.database"):
            with pytest.raises(QueryBuildError):
                db.build_query("SELECT ?d", ["1e400"])
        assert "Query build failed" in caplog.text

    def test_failure_logged_at_debug(self, db, caplog):
        with caplog.at_level(logging.DEBUG, logger="sqltpl.database"):
            with pytest.raises(MissingArgumentError):
                db.build_query("SELECT ?d", [])
        assert "Query build failed" in caplog.text
        assert "SELECT ?d" in caplog.text


class TestSkip:
    def test_same_marker(self, db):
        assert db.skip() is SKIP
        assert Database().skip() is db.skip()

    def test_repr(self, db):
        assert repr(db.skip()) == "SKIP"


class TestEscaperIntegration:
    def test_connection_escape_string_used(self):
        conn = MagicMock()
        conn.escape_string.side_effect = lambda s: s.replace("'", "\\'")
        db = Database(conn)
        assert db.build_query("name = ?", ["O'Brien"]) == "name = 'O\\'Brien'"
        conn.escape_string.assert_called_once_with("O'Brien")
        conn.cursor.assert_not_called()

    def test_default_escaper(self, db):
        assert db.build_query("SET ?a", [{"name": "O'Brien"}]) == "SET `name` = 'O\\'Brien'"


class TestQueryLogging:
    def test_built_query_logged_when_enabled(self, db, caplog):
        with patch("sqltpl.database.settings") as m:
            m.SQL_LOG_QUERIES = True
            m.SQL_LOG_PREVIEW_CHARS = 500
            with caplog.at_level(logging.DEBUG, logger="sqltpl.database"):
                db.build_query("SELECT ?d", [1])
        assert "Built SQL: SELECT 1" in caplog.text

    def test_preview_truncated(self, db, caplog):
        with patch("sqltpl.database.settings") as m:
            m.SQL_LOG_QUERIES = True
            m.SQL_LOG_PREVIEW_CHARS = 6
            with caplog.at_level(logging.DEBUG, logger="sqltpl.database"):
                db.build_query("SELECT 123456", [])
        assert "Built SQL: SELECT..." in caplog.text

    def test_not_logged_by_default(self, db, caplog):
        with patch("sqltpl.database.settings") as m:
            m.SQL_LOG_QUERIES = False
            with caplog.at_level(logging.DEBUG, logger="sqltpl.database"):
                db.build_query("SELECT ?d", [1])
        assert "Built SQL" not in caplog.text


def test_concurrent_builds_are_independent(db) -> None:
    """Many threads sharing one Database get their own results."""
    template = "SELECT * FROM t WHERE id = ?d{ AND name = ?s}"

    def _build(i: int) -> str:
        args = [i, SKIP] if i % 2 else [i, f"n{i}"]
        return db.build_query(template, args)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(_build, range(200)))

    for i, sql in enumerate(results):
        if i % 2:
            assert sql == f"SELECT * FROM t WHERE id = {i}"
        else:
            assert sql == f"SELECT * FROM t WHERE id = {i} AND name = 'n{i}'"
