from typing import Any, Iterable

from sqlstrings.abstract_syntax_tree.models import Argument, Literal, SplatArgs, Sql, SqlNode

# ==================================================
# Fragment Flattener
# ==================================================

SPLAT_SEPARATOR = Literal(",")


def flatten(elements: Iterable[Any]) -> list[SqlNode]:
    """
    Normalizes raw query elements into a flat, ordered list of Literal and Argument nodes.
    """
    flat: list[SqlNode] = []
    for element in elements:
        _flatten_into(flat, element)
    return flat


def _flatten_into(flat: list[SqlNode], element: Any) -> None:
    if isinstance(element, (Literal, Argument)):
        flat.append(element)
    elif isinstance(element, Sql):
        # Query fragments can be interpolated into other queries
        for nested in element.args:
            _flatten_into(flat, nested)
    elif isinstance(element, SplatArgs):
        for i, item in enumerate(element.args):
            if i > 0:
                flat.append(SPLAT_SEPARATOR)
            _flatten_into(flat, item)
    else:
        flat.append(Argument(element))
