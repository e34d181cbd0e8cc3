"""
sqlstrings: SQL templates with safe parameter interpolation.

Interpolations like ``$x`` become query parameters instead of being spliced
into the SQL text::

    from sqlstrings import sql, prepare

    query = sql("select * from users where name = $name and age > $(min_age + 1)")
    query_string, args = prepare(query)   # "... name = $1 and age > $2", [name, min_age + 1]
"""
from sqlstrings.abstract_syntax_tree.models import Argument, Literal, SplatArgs, Sql, SqlNode
from sqlstrings.compiler import (
    CompiledQuery,
    QueryCompiler,
    default_placeholder_string,
    placeholder_for_paramstyle,
    prepare,
)
from sqlstrings.errors import (
    MalformedExpressionError,
    QuotingViolationError,
    TemplateError,
    TemplateErrorDetails,
    UnsupportedConstructError,
)
from sqlstrings.execution import Executor, PostgresExecutor, SqliteExecutor
from sqlstrings.observability import (
    LifecycleEvent,
    ObservabilitySettings,
    QueryObservation,
    compose_event_observers,
    event_to_dict,
    make_json_event_logger,
)
from sqlstrings.template import SqlTemplate, TemplateSettings, from_parts, sql

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Argument",
    "Literal",
    "SplatArgs",
    "Sql",
    "SqlNode",
    "CompiledQuery",
    "QueryCompiler",
    "default_placeholder_string",
    "placeholder_for_paramstyle",
    "prepare",
    "MalformedExpressionError",
    "QuotingViolationError",
    "TemplateError",
    "TemplateErrorDetails",
    "UnsupportedConstructError",
    "Executor",
    "PostgresExecutor",
    "SqliteExecutor",
    "LifecycleEvent",
    "ObservabilitySettings",
    "QueryObservation",
    "compose_event_observers",
    "event_to_dict",
    "make_json_event_logger",
    "SqlTemplate",
    "TemplateSettings",
    "from_parts",
    "sql",
]
