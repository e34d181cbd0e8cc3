from sqlstrings.abstract_syntax_tree.models import Literal
from sqlstrings.errors import quoting_violation
from sqlstrings.template.expressions import ParsedExpression, parse_expression
from sqlstrings.template.settings import TemplateSettings

# ==================================================
# Quoting-Aware Scanner
# ==================================================

TemplatePart = Literal | ParsedExpression


def scan_template(text: str, settings: TemplateSettings | None = None) -> list[TemplatePart]:
    """
    Splits template text into literal SQL runs and interpolation sites.

    Markers inside single-quoted SQL strings are left as text, or rejected when
    ``settings.allow_markers_in_strings`` is false. A marker preceded by the
    escape character is emitted as a literal marker and the escape is dropped.
    """
    settings = settings or TemplateSettings()
    marker = settings.marker
    escape = settings.escape

    parts: list[TemplatePart] = []
    i = 0
    literal_start = 0
    literal_end = 0
    in_quote = False
    prev_was_escape = False
    while i < len(text):
        c = text[i]
        if c == marker and in_quote and not settings.allow_markers_in_strings:
            raise quoting_violation(text, i)
        if c == marker and not in_quote:
            if prev_was_escape:
                _flush(parts, text, literal_start, literal_end - 1)
                literal_start = i
                literal_end = i + 1
                i += 1
            else:
                _flush(parts, text, literal_start, literal_end)
                expression, i = parse_expression(text, i + 1)
                parts.append(expression)
                literal_start = literal_end = i
        else:
            if c == "'":
                # Standard SQL escapes quotes by doubling them, which toggles twice.
                in_quote = not in_quote
            literal_end = i + 1
            i += 1
        prev_was_escape = c == escape
    _flush(parts, text, literal_start, literal_end)
    return parts


def _flush(parts: list[TemplatePart], text: str, start: int, end: int) -> None:
    if start < end:
        parts.append(Literal(text[start:end]))
