from dataclasses import dataclass
import os
from typing import Mapping

# ==================================================
# Template Settings
# ==================================================

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class TemplateSettings:
    """
    Scanning options for SQL templates.

    Set ``allow_markers_in_strings`` to ``False`` to reject markers inside SQL
    strings, for example the ``'$s'`` in ``select * from foo where s = '$s'``.
    When converting code from plain string interpolation this is a useful
    sanity check that no manual quoting of interpolated arguments remains.
    """

    allow_markers_in_strings: bool = True
    marker: str = "$"
    escape: str = "\\"

    def __post_init__(self) -> None:
        if len(self.marker) != 1 or len(self.escape) != 1:
            raise ValueError("marker and escape must each be a single character.")
        if self.marker == self.escape:
            raise ValueError("marker and escape must differ.")
        if "'" in (self.marker, self.escape):
            raise ValueError("The single quote is reserved for SQL string literals.")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "TemplateSettings":
        """
        Builds settings from SQLSTRINGS_* environment variables, falling back to defaults.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            allow_markers_in_strings=_parse_bool(
                env.get("SQLSTRINGS_ALLOW_MARKERS_IN_STRINGS"),
                default=defaults.allow_markers_in_strings,
            ),
            marker=env.get("SQLSTRINGS_MARKER") or defaults.marker,
            escape=env.get("SQLSTRINGS_ESCAPE") or defaults.escape,
        )


def _parse_bool(value: str | None, *, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Expected a boolean value, got '{value}'.")
