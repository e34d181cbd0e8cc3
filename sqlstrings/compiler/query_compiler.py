import copy
from typing import Any, Callable

from sqlstrings.abstract_syntax_tree.models import Argument, Literal, Sql, SqlNode
from sqlstrings.compiler.compiled_query import CompiledQuery
from sqlstrings.compiler.placeholders import PlaceholderFormatter, default_placeholder_string
from sqlstrings.traversal.visitor_pattern import Visitor

# ==================================================
# Query Compiler
# ==================================================

class QueryCompiler(Visitor):
    """
    A visitor that compiles a Sql value into a query string and an ordered list of parameters.
    """

    def __init__(
        self,
        to_placeholder: PlaceholderFormatter = default_placeholder_string,
        literal_escaper: Callable[[str], str] | None = None,
    ) -> None:
        """
        Args:
            to_placeholder: Maps the 1-based parameter position to its placeholder text.
            literal_escaper: Optional transform applied to literal SQL text, e.g. doubling
                '%' for drivers using the 'format' paramstyle.
        """
        self.to_placeholder = to_placeholder
        self.literal_escaper = literal_escaper
        self._params: list[Any] = []

    def compile(self, node: SqlNode) -> CompiledQuery:
        """
        The main entry point for compiling a query.
        """
        # Parameter state lives on a per-call copy of the compiler.
        compiler = copy.copy(self)
        compiler._params = []
        sql = compiler.visit(node)
        return CompiledQuery(sql=sql, params=compiler._params)

    def visit_Sql(self, node: Sql) -> str:
        return "".join([self.visit(arg) for arg in node.args])

    def visit_Literal(self, node: Literal) -> str:
        if self.literal_escaper is not None:
            return self.literal_escaper(node.fragment)
        return node.fragment

    def visit_Argument(self, node: Argument) -> str:
        """
        Parametrizes the value to prevent SQL injection.
        """
        self._params.append(node.value)
        return self.to_placeholder(len(self._params))


def prepare(query: Sql, to_placeholder: PlaceholderFormatter = default_placeholder_string) -> tuple[str, list[Any]]:
    """
    Compiles a query to its (query string, argument list) pair.
    """
    compiled = QueryCompiler(to_placeholder).compile(query)
    return compiled.sql, compiled.params
