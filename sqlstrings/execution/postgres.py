from typing import Any, Sequence, cast

from sqlstrings.abstract_syntax_tree.models import Sql
from sqlstrings.compiler.compiled_query import CompiledQuery
from sqlstrings.compiler.placeholders import escape_percent, format_placeholder
from sqlstrings.compiler.query_compiler import QueryCompiler
from sqlstrings.execution.base import Executor
from sqlstrings.observability import ObservabilitySettings

# ==================================================
# PostgreSQL Executor
# ==================================================

class PostgresExecutor(Executor):
    """
    An executor for PostgreSQL using the 'psycopg' library.

    psycopg binds client-side with '%s' placeholders, so the default compiler
    emits that style and doubles any '%' found in literal SQL text.
    """

    def __init__(
        self,
        connection_info: str | dict[str, Any] | None = None,
        connection: Any | None = None,
        compiler: QueryCompiler | None = None,
        observability_settings: ObservabilitySettings | None = None,
    ) -> None:
        """
        Initializes the executor with connection information or an existing connection.

        Args:
            connection_info: A connection string or a dictionary of parameters.
            connection: An existing psycopg connection object, owned by the caller.
            compiler: An optional compiler overriding the placeholder style.
        """
        if connection_info is None and connection is None:
            raise ValueError("Either connection_info or connection must be provided.")

        self.connection_info = connection_info
        self.connection = connection
        self.compiler = compiler or QueryCompiler(format_placeholder, literal_escaper=escape_percent)
        self.observability_settings = observability_settings or ObservabilitySettings()
        self._psycopg = None

    def _get_psycopg(self) -> Any:
        """
        Lazily imports psycopg and returns the module.
        """
        if self._psycopg is None:
            try:
                import psycopg
                self._psycopg = psycopg
            except ImportError:
                raise ImportError(
                    "The 'psycopg' library is required for PostgresExecutor. "
                    "Install it with 'pip install psycopg[binary]'."
                )
        return self._psycopg

    def _connect(self) -> Any:
        psycopg = self._get_psycopg()
        if isinstance(self.connection_info, dict):
            return psycopg.connect(**self.connection_info)
        return psycopg.connect(self.connection_info)

    def _get_connection_for_query(self) -> tuple[Any, bool]:
        if self.connection is not None:
            return self.connection, False
        return self._connect(), True

    def _run(self, sql: str, params: Sequence[Any] | None, fetch: str | None) -> Any:
        conn, should_close = self._get_connection_for_query()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                if fetch == "all" or (fetch is None and cur.description):
                    result = cur.fetchall()
                elif fetch == "one":
                    result = cur.fetchone()
                else:
                    result = None
            if should_close and getattr(conn, "autocommit", False) is False:
                conn.commit()
            return result
        finally:
            if should_close:
                conn.close()

    def execute(self, query: CompiledQuery | Sql) -> Any:
        """
        Executes a query. Returns the rows for statements that produce any, or None.
        """
        compiled_query = self._compile_if_needed(query)
        return self._observe_query(
            operation="execute",
            compiled_query=compiled_query,
            run=lambda: self._run(compiled_query.sql, compiled_query.params, None),
        )

    def fetch_all(self, query: CompiledQuery | Sql) -> Sequence[Sequence[Any]]:
        compiled_query = self._compile_if_needed(query)
        return cast(
            Sequence[Sequence[Any]],
            self._observe_query(
                operation="fetch_all",
                compiled_query=compiled_query,
                run=lambda: self._run(compiled_query.sql, compiled_query.params, "all"),
            ),
        )

    def fetch_one(self, query: CompiledQuery | Sql) -> Sequence[Any] | None:
        compiled_query = self._compile_if_needed(query)
        return cast(
            Sequence[Any] | None,
            self._observe_query(
                operation="fetch_one",
                compiled_query=compiled_query,
                run=lambda: self._run(compiled_query.sql, compiled_query.params, "one"),
            ),
        )

    def execute_raw(self, sql: str) -> None:
        """
        Executes SQL text as-is; no parameters are sent, so '%' needs no escaping.
        """
        self._observe_query(
            operation="execute_raw",
            compiled_query=CompiledQuery(sql=sql),
            run=lambda: self._run(sql, None, "none"),
        )
