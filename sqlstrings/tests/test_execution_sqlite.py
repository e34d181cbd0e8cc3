import sqlite3
from pathlib import Path

import pytest

from sqlstrings.compiler.compiled_query import CompiledQuery
from sqlstrings.observability import LifecycleEvent, ObservabilitySettings, QueryObservation
from sqlstrings.execution.sqlite import SqliteExecutor
from sqlstrings.template.builder import sql


@pytest.fixture
def memory_executor():
    connection = sqlite3.connect(":memory:")
    executor = SqliteExecutor(connection=connection)
    executor.execute_raw("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, age INTEGER)")
    yield executor
    connection.close()


def test_sqlite_executor_requires_connection() -> None:
    with pytest.raises(ValueError):
        SqliteExecutor()


def test_sqlite_executor_round_trips_sql_values(memory_executor) -> None:
    for row in [(1, "alice", 30), (2, "bob", 25), (3, "carol", 35)]:
        memory_executor.execute(sql("INSERT INTO users (id, name, age) VALUES ($(*row))"))

    min_age = 26
    rows = memory_executor.fetch_all(sql("SELECT name FROM users WHERE age > $min_age ORDER BY id"))
    assert rows == [("alice",), ("carol",)]

    name = "bob"
    assert memory_executor.fetch_one(sql("SELECT age FROM users WHERE name = $name")) == (25,)


def test_sqlite_executor_keeps_quoted_markers_as_text(memory_executor) -> None:
    memory_executor.execute(sql("INSERT INTO users (id, name, age) VALUES (1, '$x', $(40))"))
    assert memory_executor.fetch_all(sql("SELECT name, age FROM users")) == [("$x", 40)]


def test_sqlite_executor_composes_fragments(memory_executor) -> None:
    memory_executor.execute(sql("INSERT INTO users (id, name, age) VALUES (1, 'a', 20), (2, 'b', 30)"))
    age = 25
    ids = [1, 2]
    where = sql("WHERE age > $age")
    and_clause = sql("AND id IN ($(*ids))")
    query = sql("SELECT id FROM users") + where + and_clause
    assert memory_executor.fetch_all(query) == [(2,)]


def test_sqlite_executor_accepts_compiled_query(memory_executor) -> None:
    memory_executor.execute(CompiledQuery(sql="INSERT INTO users (id, name) VALUES (?, ?)", params=[7, "z"]))
    assert memory_executor.fetch_one(CompiledQuery(sql="SELECT name FROM users WHERE id = ?", params=[7])) == ("z",)


def test_sqlite_executor_with_path_commits_and_closes(tmp_path: Path) -> None:
    db_path = tmp_path / "executor.sqlite"
    executor = SqliteExecutor(connection_info=str(db_path), connect_timeout_seconds=1.0)
    executor.execute_raw("CREATE TABLE t (id INTEGER)")
    value = 5
    executor.execute(sql("INSERT INTO t VALUES ($value)"))

    connection = sqlite3.connect(db_path)
    try:
        assert connection.execute("SELECT id FROM t").fetchall() == [(5,)]
    finally:
        connection.close()


def test_sqlite_executor_closed_raises(tmp_path: Path) -> None:
    with SqliteExecutor(connection_info=str(tmp_path / "closed.sqlite")) as executor:
        pass
    with pytest.raises(RuntimeError):
        executor.execute_raw("SELECT 1")


def test_sqlite_observability_reports_queries(memory_executor) -> None:
    observations: list[QueryObservation] = []
    events: list[LifecycleEvent] = []
    memory_executor.observability_settings = ObservabilitySettings(
        query_observer=observations.append,
        event_observer=events.append,
        metadata={"service": "unit-test"},
    )

    value = "x"
    memory_executor.execute(sql("INSERT INTO users (id, name) VALUES (1, $value)"))
    with pytest.raises(sqlite3.OperationalError):
        memory_executor.execute(sql("INSERT INTO missing VALUES ($value)"))

    assert len(observations) == 2
    ok, failed = observations
    assert ok.dialect == "sqlite"
    assert ok.operation == "execute"
    assert ok.sql == "INSERT INTO users (id, name) VALUES (1, ?)"
    assert ok.param_count == 1
    assert ok.succeeded is True
    assert ok.duration_ms >= 0
    assert ok.metadata["service"] == "unit-test"
    assert failed.succeeded is False
    assert failed.error_type == "OperationalError"

    assert [event.event for event in events] == ["query.start", "query.end", "query.start", "query.end"]
    assert events[0].query_id == events[1].query_id
    assert events[3].success is False
