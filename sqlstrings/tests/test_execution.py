import pytest
from unittest.mock import MagicMock, patch

from sqlstrings.compiler.compiled_query import CompiledQuery
from sqlstrings.execution.postgres import PostgresExecutor
from sqlstrings.template.builder import sql


@pytest.fixture
def mock_psycopg():
    with patch("sqlstrings.execution.postgres.PostgresExecutor._get_psycopg") as mock:
        mock_module = MagicMock()
        mock.return_value = mock_module
        yield mock_module


def test_postgres_executor_requires_connection():
    with pytest.raises(ValueError):
        PostgresExecutor()


def test_postgres_executor_fetch_all(mock_psycopg):
    executor = PostgresExecutor(connection_info="dsn")
    query = CompiledQuery(sql="SELECT %s", params=[1])

    # Setup mock chain: connect -> cursor -> execute -> fetchall
    mock_conn = mock_psycopg.connect.return_value
    mock_cur = mock_conn.cursor.return_value.__enter__.return_value
    mock_cur.fetchall.return_value = [(1,)]

    results = executor.fetch_all(query)

    assert results == [(1,)]
    mock_psycopg.connect.assert_called_once_with("dsn")
    mock_cur.execute.assert_called_once_with("SELECT %s", [1])
    mock_cur.fetchall.assert_called_once()
    mock_conn.close.assert_called_once()


def test_postgres_executor_compiles_sql_values(mock_psycopg):
    executor = PostgresExecutor(connection_info={"host": "localhost", "dbname": "app"})
    ids = [3, 4]
    query = sql("select * from t where name like 'a%' and id in ($(*ids))")

    mock_conn = mock_psycopg.connect.return_value
    mock_cur = mock_conn.cursor.return_value.__enter__.return_value
    mock_cur.fetchone.return_value = (3, "alice")

    row = executor.fetch_one(query)

    assert row == (3, "alice")
    mock_psycopg.connect.assert_called_once_with(host="localhost", dbname="app")
    mock_cur.execute.assert_called_once_with("select * from t where name like 'a%%' and id in (%s,%s)", [3, 4])


def test_postgres_executor_uses_caller_connection_without_closing():
    mock_conn = MagicMock()
    executor = PostgresExecutor(connection=mock_conn)
    mock_cur = mock_conn.cursor.return_value.__enter__.return_value

    value = 10
    executor.execute(sql("insert into t values ($value)"))

    mock_cur.execute.assert_called_once_with("insert into t values (%s)", [10])
    mock_conn.close.assert_not_called()


def test_postgres_executor_execute_raw_sends_no_params():
    mock_conn = MagicMock()
    executor = PostgresExecutor(connection=mock_conn)
    mock_cur = mock_conn.cursor.return_value.__enter__.return_value

    executor.execute_raw("create table t (pct text default '100%')")

    mock_cur.execute.assert_called_once_with("create table t (pct text default '100%')", None)


def test_postgres_executor_import_error():
    # Test that it raises ImportError if psycopg is missing
    executor = PostgresExecutor(connection_info="dsn")

    with patch('builtins.__import__') as mock_import:
        def side_effect(name, *args, **kwargs):
            if name == 'psycopg':
                raise ImportError("psycopg not found")
            return MagicMock() # Return a mock for other imports

        mock_import.side_effect = side_effect

        with pytest.raises(ImportError) as excinfo:
            executor._get_psycopg()
        assert "The 'psycopg' library is required" in str(excinfo.value)
