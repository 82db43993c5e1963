import sqlite3

import pytest

from corplayer.database.sqlquery import SqlQuery


@pytest.fixture
def db():
    connection = sqlite3.connect(":memory:", isolation_level=None)
    connection.execute("CREATE TABLE t (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT, size INTEGER)")
    yield connection
    connection.close()


def _insert(db, name, size):
    query = SqlQuery(db, "INSERT INTO t (name, size) VALUES (:name, :size)")
    query.bind_value(":name", name)
    query.bind_value(":size", size)
    query.exec()
    return query


def test_insert_and_select_round_trip(db):
    _insert(db, "song", 3)
    query = SqlQuery(db, "SELECT name, size FROM t")
    query.exec()
    assert query.next() is True
    assert query.value(0) == "song"
    assert query.value(1) == 3
    assert query.next() is False


def test_last_insert_id_matches_row(db):
    query = _insert(db, "song", 3)
    row_id = db.execute("SELECT id FROM t WHERE name = 'song'").fetchone()[0]
    assert query.last_insert_id == row_id


def test_last_query_has_values_written_in(db):
    query = _insert(db, "song", 3)
    assert query.last_query == "INSERT INTO t (name, size) VALUES (song, 3)"


def test_logged_bindings_cleared_after_exec(db):
    query = _insert(db, "song", 3)
    query.exec()
    assert query.last_query == query.statement
    assert db.execute("SELECT COUNT(*) FROM t").fetchone()[0] == 2


@pytest.mark.parametrize("value", [0, -5])
def test_numeric_value_not_positive_becomes_minus_one(db, value):
    query = SqlQuery(db, "INSERT INTO t (size) VALUES (:size)")
    query.bind_numeric_value(":size", value)
    query.exec()
    assert db.execute("SELECT size FROM t").fetchone()[0] == -1


def test_numeric_value_positive_kept(db):
    query = SqlQuery(db, "INSERT INTO t (size) VALUES (:size)")
    query.bind_numeric_value(":size", 12)
    query.exec()
    assert db.execute("SELECT size FROM t").fetchone()[0] == 12


def test_numeric_value_rejects_text(db):
    query = SqlQuery(db, "INSERT INTO t (size) VALUES (:size)")
    with pytest.raises(TypeError):
        query.bind_numeric_value(":size", "12")


def test_string_value_none_becomes_empty(db):
    query = SqlQuery(db, "INSERT INTO t (name) VALUES (:name)")
    query.bind_string_value(":name", None)
    query.exec()
    assert db.execute("SELECT name FROM t").fetchone()[0] == ""


@pytest.mark.parametrize("flag, stored", [(True, 1), (False, 0)])
def test_bool_value_stored_as_integer(db, flag, stored):
    query = SqlQuery(db, "INSERT INTO t (size) VALUES (:size)")
    query.bind_bool_value(":size", flag)
    query.exec()
    assert db.execute("SELECT size FROM t").fetchone()[0] == stored


def test_failing_statement_raises(db):
    query = SqlQuery(db, "SELECT * FROM missing_table")
    with pytest.raises(sqlite3.Error):
        query.exec()


def test_value_without_row_raises(db):
    query = SqlQuery(db, "SELECT name FROM t")
    query.exec()
    with pytest.raises(RuntimeError):
        query.value(0)


def test_next_before_exec_is_false(db):
    query = SqlQuery(db, "SELECT name FROM t")
    assert query.next() is False


def test_iteration_yields_all_rows(db):
    _insert(db, "a", 1)
    _insert(db, "b", 2)
    query = SqlQuery(db, "SELECT name FROM t ORDER BY id")
    query.exec()
    assert [row[0] for row in query] == ["a", "b"]