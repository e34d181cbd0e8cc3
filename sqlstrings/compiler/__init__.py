from sqlstrings.compiler.compiled_query import CompiledQuery
from sqlstrings.compiler.query_compiler import QueryCompiler, prepare
from sqlstrings.compiler.placeholders import (
    PARAMSTYLES,
    default_placeholder_string,
    escape_percent,
    format_placeholder,
    numeric_placeholder,
    placeholder_for_paramstyle,
    qmark_placeholder,
)

__all__ = [
    "CompiledQuery",
    "QueryCompiler",
    "prepare",
    "PARAMSTYLES",
    "default_placeholder_string",
    "escape_percent",
    "format_placeholder",
    "numeric_placeholder",
    "placeholder_for_paramstyle",
    "qmark_placeholder",
]
