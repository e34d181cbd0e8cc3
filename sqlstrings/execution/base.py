from abc import ABC, abstractmethod
from datetime import datetime, timezone
import time
from typing import Any, Callable, Sequence
from uuid import uuid4

from sqlstrings.abstract_syntax_tree.models import Sql
from sqlstrings.compiler.compiled_query import CompiledQuery
from sqlstrings.compiler.query_compiler import QueryCompiler
from sqlstrings.observability import LifecycleEvent, ObservabilitySettings, QueryObservation

# ==================================================
# Base Executor
# ==================================================

class Executor(ABC):
    """
    Abstract base class for running compiled queries through a DB-API driver.

    Executors only consume the compiled (sql, params) pair; the driver binds
    the parameters positionally.
    """

    compiler: QueryCompiler
    observability_settings: ObservabilitySettings

    @abstractmethod
    def execute(self, query: CompiledQuery | Sql) -> Any:
        """
        Executes a single query. Returns rows when the statement produces any.
        """
        pass

    @abstractmethod
    def fetch_all(self, query: CompiledQuery | Sql) -> Sequence[Sequence[Any]]:
        """
        Executes a query and returns all resulting rows.
        """
        pass

    @abstractmethod
    def fetch_one(self, query: CompiledQuery | Sql) -> Sequence[Any] | None:
        """
        Executes a query and returns a single resulting row.
        """
        pass

    @abstractmethod
    def execute_raw(self, sql: str) -> None:
        """
        Executes SQL text without parameters, e.g. DDL in fixtures.
        """
        pass

    def _compile_if_needed(self, query: CompiledQuery | Sql) -> CompiledQuery:
        if isinstance(query, Sql):
            return self.compiler.compile(query)
        return query

    # ==================================================
    # Observability Helpers
    # ==================================================

    def _next_query_id(self) -> str:
        return uuid4().hex

    def _metadata(self) -> dict[str, Any]:
        return dict(self.observability_settings.metadata)

    def _emit_event(self, event: str, *, success: bool, **kwargs: Any) -> None:
        observer = self.observability_settings.event_observer
        if observer is None:
            return

        observer(
            LifecycleEvent(
                timestamp=datetime.now(timezone.utc).isoformat(),
                event=event,
                component=self._dialect_name(),
                success=success,
                metadata=self._metadata(),
                **kwargs,
            )
        )

    def _dialect_name(self) -> str:
        name = self.__class__.__name__.lower()
        name = name.replace("executor", "")
        return name or "unknown"

    def _observe_query(
        self,
        *,
        operation: str,
        compiled_query: CompiledQuery,
        run: Callable[[], Any],
    ) -> Any:
        query_id = self._next_query_id()
        self._emit_event(
            "query.start",
            success=True,
            operation=operation,
            query_id=query_id,
            param_count=len(compiled_query.params),
        )

        started = time.perf_counter()
        error: Exception | None = None
        try:
            return run()
        except Exception as exc:
            error = exc
            raise
        finally:
            duration_ms = (time.perf_counter() - started) * 1000
            query_observer = self.observability_settings.query_observer
            if query_observer is not None:
                query_observer(
                    QueryObservation(
                        dialect=self._dialect_name(),
                        operation=operation,
                        sql=compiled_query.sql,
                        param_count=len(compiled_query.params),
                        duration_ms=duration_ms,
                        succeeded=error is None,
                        metadata=self._metadata(),
                        error_type=type(error).__name__ if error is not None else None,
                        error_message=str(error) if error is not None else None,
                    )
                )
            self._emit_event(
                "query.end",
                success=error is None,
                operation=operation,
                query_id=query_id,
                duration_ms=duration_ms,
                param_count=len(compiled_query.params),
                error_type=type(error).__name__ if error is not None else None,
                error_message=str(error) if error is not None else None,
            )

    # ==================================================
    # Lifecycle Controls
    # ==================================================

    def close(self) -> None:
        """
        Releases executor-owned resources.
        Subclasses should override when they hold lifecycle state.
        """
        return None

    def __enter__(self) -> "Executor":
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()
