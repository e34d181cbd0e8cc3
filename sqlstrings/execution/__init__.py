from sqlstrings.execution.base import Executor
from sqlstrings.execution.postgres import PostgresExecutor
from sqlstrings.execution.sqlite import SqliteExecutor

__all__ = [
    "Executor",
    "PostgresExecutor",
    "SqliteExecutor",
]
