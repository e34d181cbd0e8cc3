"""
Finds where an interpolated Python expression ends inside template text.

Accepted forms after the marker:

* an identifier followed by any chain of ``.name`` and ``[...]`` accesses,
  e.g. ``$user.id`` or ``$rows[0]["name"]``
* a parenthesized expression, e.g. ``$(x + 1)``
* a parenthesized splat, e.g. ``$(*values)``, which expands the collection
  into comma separated parameters

Bracket matching skips over Python string literals. The extracted source is
then validated and compiled with :mod:`ast`.
"""
import ast
from dataclasses import dataclass
from types import CodeType

from sqlstrings.errors import malformed_expression

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {")", "]", "}"}
_QUOTES = {"'", '"'}


@dataclass(frozen=True)
class ParsedExpression:
    """
    An interpolation site: the expression source, its compiled code and
    whether it denotes a splat.
    """

    source: str
    code: CodeType
    splat: bool = False


def parse_expression(text: str, start: int) -> tuple[ParsedExpression, int]:
    """
    Parses exactly one expression beginning at ``start``.

    Returns the parsed expression and the offset immediately following it.
    """
    marker_position = start - 1
    if start >= len(text):
        raise malformed_expression(text, marker_position, "expected an expression after the marker")

    c = text[start]
    if c == "(":
        end = _find_closing_bracket(text, start, marker_position)
        inner = text[start + 1:end - 1].strip()
        if inner.startswith("*") and not inner.startswith("**"):
            # `(*xs,)` builds the tuple of elements, and also accepts `*xs, *ys`.
            source = "(" + inner.rstrip(",") + ",)"
            return _compile(text, marker_position, inner, source, splat=True), end
        return _compile(text, marker_position, inner, "(" + inner + "\n)"), end

    if c == "_" or c.isalpha():
        end = _scan_access_chain(text, start, marker_position)
        source = text[start:end]
        return _compile(text, marker_position, source, source), end

    raise malformed_expression(text, marker_position, f"unexpected {c!r} after the marker")


def _compile(text: str, marker_position: int, display: str, source: str, splat: bool = False) -> ParsedExpression:
    if not display:
        raise malformed_expression(text, marker_position, "empty expression")
    try:
        tree = ast.parse(source, mode="eval")
        code = compile(tree, "<sql template>", "eval")
    except (SyntaxError, ValueError) as exc:
        raise malformed_expression(text, marker_position, f"invalid expression `{display}` ({exc})") from exc
    return ParsedExpression(source=display, code=code, splat=splat)


def _scan_identifier(text: str, i: int) -> int:
    while i < len(text) and (text[i] == "_" or text[i].isalnum()):
        i += 1
    return i


def _scan_access_chain(text: str, start: int, marker_position: int) -> int:
    i = _scan_identifier(text, start)
    while i < len(text):
        if text[i] == "." and i + 1 < len(text) and (text[i + 1] == "_" or text[i + 1].isalpha()):
            i = _scan_identifier(text, i + 1)
        elif text[i] == "[":
            i = _find_closing_bracket(text, i, marker_position)
        else:
            break
    return i


def _find_closing_bracket(text: str, start: int, marker_position: int) -> int:
    """
    Returns the offset just past the bracket matching the one at ``start``.
    """
    expected: list[str] = []
    i = start
    while i < len(text):
        c = text[i]
        if c in _QUOTES:
            i = _skip_string(text, i, marker_position)
            continue
        if c in _OPENERS:
            expected.append(_OPENERS[c])
        elif c in _CLOSERS:
            if not expected or expected[-1] != c:
                raise malformed_expression(text, marker_position, f"unbalanced {c!r}")
            expected.pop()
            if not expected:
                return i + 1
        elif c == "#":
            newline = text.find("\n", i)
            if newline == -1:
                break
            i = newline
        i += 1
    raise malformed_expression(text, marker_position, f"unbalanced {text[start]!r}")


def _skip_string(text: str, start: int, marker_position: int) -> int:
    quote = text[start]
    delimiter = quote * 3 if text.startswith(quote * 3, start) else quote
    i = start + len(delimiter)
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text.startswith(delimiter, i):
            return i + len(delimiter)
        if text[i] == "\n" and len(delimiter) == 1:
            break
        i += 1
    raise malformed_expression(text, marker_position, "unterminated string literal")
