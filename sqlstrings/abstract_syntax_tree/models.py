from abc import ABC
from dataclasses import dataclass
from typing import Any, Iterable

# ==================================================
# Base classes
# ==================================================

@dataclass(frozen=True)
class SqlNode(ABC):
    """
    A generic query element. Every element a Sql value can hold inherits from this class.
    """
    pass

# ==================================================
# Leaf nodes
# ==================================================

@dataclass(frozen=True, init=False)
class Literal(SqlNode):
    """
    A fragment of raw SQL source text, emitted verbatim and never bound as a parameter.

    Non-string values are stringified, which allows embedding identifiers that
    cannot be passed as parameters, e.g. ``Literal(column_name)``.
    """
    fragment: str

    def __init__(self, fragment: Any) -> None:
        object.__setattr__(self, "fragment", fragment if isinstance(fragment, str) else str(fragment))

@dataclass(frozen=True)
class Argument(SqlNode):
    """
    An opaque value destined to become a single bound query parameter.
    """
    value: Any

@dataclass(frozen=True, init=False)
class SplatArgs(SqlNode):
    """
    A collection whose elements are expanded, comma separated, in place of a single interpolation.
    """
    args: tuple[Any, ...]

    def __init__(self, args: Iterable[Any]) -> None:
        object.__setattr__(self, "args", tuple(args))

# ==================================================
# Query
# ==================================================

@dataclass(frozen=True, init=False)
class Sql(SqlNode):
    """
    A query or query fragment which keeps track of interpolations and passes
    them as query parameters.

    Construction flattens the given elements: nested ``Sql`` values are spliced
    in place, ``SplatArgs`` are expanded and any plain value becomes an
    ``Argument``. The stored ``args`` therefore only hold ``Literal`` and
    ``Argument`` nodes. ``Sql()`` is the empty query.
    """
    args: tuple[SqlNode, ...]

    def __init__(self, args: Iterable[Any] = ()) -> None:
        # Imported lazily, the flattener depends on these node types.
        from sqlstrings.traversal.flattener import flatten

        if isinstance(args, str):
            raise TypeError("Sql expects a sequence of elements; use sql() to scan template text.")
        object.__setattr__(self, "args", tuple(flatten(args)))

    def __add__(self, other: Any) -> "Sql":
        if not isinstance(other, Sql):
            return NotImplemented
        return Sql(self.args + (Literal(" "),) + other.args)

    def __bool__(self) -> bool:
        return bool(self.args)

    def __str__(self) -> str:
        from sqlstrings.compiler.query_compiler import QueryCompiler

        return QueryCompiler().compile(self).render()
