from datetime import datetime, timezone
import inspect
import time
from typing import Any, Iterable, Mapping

from sqlstrings.abstract_syntax_tree.models import Argument, Literal, SplatArgs, Sql, SqlNode
from sqlstrings.errors import (
    QuotingViolationError,
    TemplateError,
    TemplateErrorDetails,
    UnsupportedConstructError,
)
from sqlstrings.observability import LifecycleEvent, ObservabilitySettings
from sqlstrings.template.scanner import TemplatePart, scan_template
from sqlstrings.template.settings import TemplateSettings

# ==================================================
# Compiled Templates
# ==================================================


class SqlTemplate:
    """
    A scanned SQL template, ready to be bound to values.

    All template errors surface here, at construction, before any Sql value exists.
    """

    def __init__(
        self,
        source: str,
        settings: TemplateSettings | None = None,
        observability_settings: ObservabilitySettings | None = None,
    ) -> None:
        if not isinstance(source, str):
            raise _unsupported(source)
        self.source = source
        self.settings = settings or TemplateSettings()
        self.observability_settings = observability_settings or ObservabilitySettings()
        self.parts: tuple[TemplatePart, ...] = self._scan()

    def _scan(self) -> tuple[TemplatePart, ...]:
        started = time.perf_counter()
        error: TemplateError | None = None
        parts: list[TemplatePart] = []
        try:
            parts = scan_template(self.source, self.settings)
            return tuple(parts)
        except TemplateError as exc:
            error = exc
            raise
        finally:
            self._emit_event(
                "template.scan",
                success=error is None,
                duration_ms=(time.perf_counter() - started) * 1000,
                part_count=len(parts),
                expression_count=sum(1 for part in parts if not isinstance(part, Literal)),
                error_type=type(error).__name__ if error is not None else None,
                error_message=str(error) if error is not None else None,
            )

    def _emit_event(self, event: str, *, success: bool, **kwargs: Any) -> None:
        observer = self.observability_settings.event_observer
        if observer is None:
            return
        observer(
            LifecycleEvent(
                timestamp=datetime.now(timezone.utc).isoformat(),
                event=event,
                component="template",
                success=success,
                metadata=dict(self.observability_settings.metadata),
                **kwargs,
            )
        )

    def bind(self, namespace: Mapping[str, Any] | None = None, /, **values: Any) -> Sql:
        """
        Evaluates each interpolated expression against ``values`` then ``namespace``.
        """
        return self.evaluate({**(namespace or {}), **values})

    def evaluate(self, namespace: dict[str, Any]) -> Sql:
        """
        Evaluates each interpolated expression with ``namespace`` as its globals.

        Comprehensions and lambdas inside an expression resolve names in the
        same mapping.
        """
        args: list[Any] = []
        for part in self.parts:
            if isinstance(part, Literal):
                args.append(part)
                continue
            value = eval(part.code, namespace)
            args.append(SplatArgs(value) if part.splat else value)
        return Sql(args)

    def __repr__(self) -> str:
        return f"SqlTemplate({self.source!r})"


# ==================================================
# Entry Points
# ==================================================


def sql(template: Any = "", /, *, settings: TemplateSettings | None = None, **values: Any) -> Sql:
    """
    Builds a query, passing interpolated values as parameters rather than
    splicing them into the SQL text::

        sql("select * from users where id = $user_id")
        sql("insert into foo values($(*row))")

    Expressions are evaluated against ``values`` first, then the caller's local
    and global variables. Variables of an enclosing function are only visible
    when the caller references them itself, so pass them as keywords::

        def build():
            return sql("select * from t where tenant = $tenant_id", tenant_id=tenant_id)

    ``sql()`` is the empty query, handy when SQL is built conditionally.

    A list or tuple is treated as pre-tokenized parts (see ``from_parts``). A
    ``string.templatelib.Template`` is treated likewise, except that every
    interpolated value is bound as an argument. Neither form accepts
    ``settings`` or keyword values.
    """
    if isinstance(template, str):
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        try:
            if caller is None:
                return SqlTemplate(template, settings).bind(**values)
            namespace = {**caller.f_globals, **caller.f_locals, **values}
            return SqlTemplate(template, settings).evaluate(namespace)
        finally:
            del frame, caller
    if isinstance(template, (list, tuple)):
        _reject_options(settings, values)
        return from_parts(template)
    if _is_templatelib_template(template):
        _reject_options(settings, values)
        return from_parts([part if isinstance(part, str) else _as_element(part.value) for part in template])
    raise _unsupported(template)


def from_parts(parts: Iterable[Any]) -> Sql:
    """
    Builds a query from pre-tokenized parts: ``str`` items are literal SQL and
    everything else is an argument.

    Arguments adjacent to a single quote are rejected, since a bound parameter
    can never sit inside a SQL string.

    A runtime string is *not* bound: ``from_parts(["... name = ", user_input])``
    splices ``user_input`` into the SQL text. Wrap string values in
    ``Argument(...)`` to pass them as parameters.
    """
    items = list(parts)
    for i, item in enumerate(items):
        if isinstance(item, str):
            continue
        prev_quote = i > 0 and isinstance(items[i - 1], str) and items[i - 1].endswith("'")
        next_quote = i + 1 < len(items) and isinstance(items[i + 1], str) and items[i + 1].startswith("'")
        if prev_quote or next_quote:
            template = _describe(items)
            subexpression = _describe(items[max(i - 1, 0):i + 2])
            raise QuotingViolationError(
                f"Interpolated arguments should not be quoted, but found quoting in subexpression {subexpression}",
                TemplateErrorDetails(template=template, position=i, subexpression=subexpression),
            )
    return Sql([Literal(item) if isinstance(item, str) else item for item in items])


def _as_element(value: Any) -> Any:
    if isinstance(value, SqlNode):
        return value
    return Argument(value)


def _reject_options(settings: TemplateSettings | None, values: dict[str, Any]) -> None:
    if settings is not None or values:
        raise TypeError("settings and keyword values only apply to template text, not pre-tokenized parts.")


def _describe(items: list[Any]) -> str:
    return "".join([item if isinstance(item, str) else "{" + repr(item) + "}" for item in items])


def _is_templatelib_template(value: Any) -> bool:
    try:
        from string.templatelib import Template
    except ImportError:
        return False
    return isinstance(value, Template)


def _unsupported(value: Any) -> UnsupportedConstructError:
    return UnsupportedConstructError(
        f"Unexpected value passed to sql: {value!r}",
        TemplateErrorDetails(template=repr(value)),
    )
