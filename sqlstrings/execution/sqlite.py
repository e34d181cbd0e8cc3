from typing import Any, Sequence, cast

from sqlstrings.abstract_syntax_tree.models import Sql
from sqlstrings.compiler.compiled_query import CompiledQuery
from sqlstrings.compiler.placeholders import qmark_placeholder
from sqlstrings.compiler.query_compiler import QueryCompiler
from sqlstrings.execution.base import Executor
from sqlstrings.observability import ObservabilitySettings

# ==================================================
# SQLite Executor
# ==================================================


class SqliteExecutor(Executor):
    """
    An executor for SQLite using the standard library 'sqlite3' module.
    """

    def __init__(
        self,
        connection_info: str | None = None,
        connection: Any | None = None,
        compiler: QueryCompiler | None = None,
        connect_timeout_seconds: float | None = None,
        observability_settings: ObservabilitySettings | None = None,
    ) -> None:
        """
        Args:
            connection_info: Database path; a connection is opened and closed per call.
            connection: An existing sqlite3 connection, owned by the caller.
            compiler: Overrides the default qmark-style compiler.
        """
        if connection_info is None and connection is None:
            raise ValueError("Either connection_info or connection must be provided.")

        self.connection_info = connection_info
        self.connection = connection
        self.compiler = compiler or QueryCompiler(qmark_placeholder)
        self.connect_timeout_seconds = connect_timeout_seconds
        self.observability_settings = observability_settings or ObservabilitySettings()
        self._sqlite3 = None
        self._closed = False

    def _get_sqlite3(self) -> Any:
        if self._sqlite3 is None:
            import sqlite3

            self._sqlite3 = sqlite3
        return self._sqlite3

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Executor is closed.")

    def _connect(self) -> Any:
        sqlite3 = self._get_sqlite3()
        if self.connect_timeout_seconds is None:
            return sqlite3.connect(self.connection_info)
        return sqlite3.connect(self.connection_info, timeout=self.connect_timeout_seconds)

    def _get_connection_for_query(self) -> tuple[Any, bool]:
        self._ensure_open()
        if self.connection is not None:
            return self.connection, False
        return self._connect(), True

    def _run(self, compiled_query: CompiledQuery, fetch: str | None) -> Any:
        conn, should_close = self._get_connection_for_query()
        try:
            cur = conn.execute(compiled_query.sql, compiled_query.params)
            if fetch == "all" or (fetch is None and cur.description):
                result = cur.fetchall()
            elif fetch == "one":
                result = cur.fetchone()
            else:
                result = None
            if should_close:
                conn.commit()
            return result
        finally:
            if should_close:
                conn.close()

    def execute(self, query: CompiledQuery | Sql) -> Any:
        compiled_query = self._compile_if_needed(query)
        return self._observe_query(
            operation="execute",
            compiled_query=compiled_query,
            run=lambda: self._run(compiled_query, None),
        )

    def fetch_all(self, query: CompiledQuery | Sql) -> Sequence[Sequence[Any]]:
        compiled_query = self._compile_if_needed(query)
        return cast(
            Sequence[Sequence[Any]],
            self._observe_query(
                operation="fetch_all",
                compiled_query=compiled_query,
                run=lambda: self._run(compiled_query, "all"),
            ),
        )

    def fetch_one(self, query: CompiledQuery | Sql) -> Sequence[Any] | None:
        compiled_query = self._compile_if_needed(query)
        return cast(
            Sequence[Any] | None,
            self._observe_query(
                operation="fetch_one",
                compiled_query=compiled_query,
                run=lambda: self._run(compiled_query, "one"),
            ),
        )

    def execute_raw(self, sql: str) -> None:
        compiled_query = CompiledQuery(sql=sql)
        self._observe_query(
            operation="execute_raw",
            compiled_query=compiled_query,
            run=lambda: self._run(compiled_query, "none"),
        )

    def close(self) -> None:
        self._closed = True
