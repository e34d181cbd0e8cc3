from sqlstrings.template.builder import SqlTemplate, from_parts, sql
from sqlstrings.template.expressions import ParsedExpression, parse_expression
from sqlstrings.template.scanner import scan_template
from sqlstrings.template.settings import TemplateSettings

__all__ = [
    "SqlTemplate",
    "from_parts",
    "sql",
    "ParsedExpression",
    "parse_expression",
    "scan_template",
    "TemplateSettings",
]
