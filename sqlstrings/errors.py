from __future__ import annotations

from dataclasses import dataclass


# ==================================================
# Template Compile-Time Errors
# ==================================================


@dataclass(slots=True)
class TemplateErrorDetails:
    """
    Structured metadata for errors raised while compiling a template.
    """

    template: str
    position: int | None = None
    subexpression: str | None = None


class TemplateError(Exception):
    """
    Base error type for malformed SQL templates.
    """

    def __init__(self, message: str, details: TemplateErrorDetails) -> None:
        self.details = details
        super().__init__(message)


class QuotingViolationError(TemplateError):
    """
    An interpolation was found inside a quoted SQL string.
    """


class MalformedExpressionError(TemplateError):
    """
    No valid expression follows an interpolation marker.
    """


class UnsupportedConstructError(TemplateError):
    pass


def quoting_violation(template: str, position: int) -> QuotingViolationError:
    subexpression = template[position:]
    return QuotingViolationError(
        "Interpolated arguments should not be quoted, but found quoting in "
        f"sql`{template}` subexpression starting at `{subexpression}`",
        TemplateErrorDetails(template=template, position=position, subexpression=subexpression),
    )


def malformed_expression(template: str, position: int, reason: str) -> MalformedExpressionError:
    return MalformedExpressionError(
        f"Malformed interpolation in sql`{template}` at offset {position}: {reason}",
        TemplateErrorDetails(template=template, position=position, subexpression=template[position:]),
    )
