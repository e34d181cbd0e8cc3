from dataclasses import dataclass, field
from typing import Any, Iterator

# ==================================================
# Compiled Output
# ==================================================

@dataclass
class CompiledQuery:
    """
    Represents the result of the compilation process.

    The i-th placeholder in ``sql`` binds ``params[i - 1]``.
    """
    sql: str
    params: list[Any] = field(default_factory=list)

    def __iter__(self) -> Iterator[Any]:
        # Allows `query_string, args = compiled`
        yield self.sql
        yield self.params

    def render(self) -> str:
        """
        Human-readable rendering: the query followed by one `$i = value` line
        per bound parameter. Diagnostics only.
        """
        if not self.params:
            return self.sql
        lines = [f"${i} = {value!r}" for i, value in enumerate(self.params, start=1)]
        return self.sql + "\n  " + "\n  ".join(lines)
