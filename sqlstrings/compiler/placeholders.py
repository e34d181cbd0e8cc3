from typing import Callable

# ==================================================
# Placeholder Styles
# ==================================================

PlaceholderFormatter = Callable[[int], str]


def default_placeholder_string(i: int) -> str:
    """
    One-indexed dollar placeholders, as understood by libpq and asyncpg.
    """
    return f"${i}"


def qmark_placeholder(i: int) -> str:
    return "?"


def format_placeholder(i: int) -> str:
    return "%s"


def numeric_placeholder(i: int) -> str:
    return f":{i}"


PARAMSTYLES: dict[str, PlaceholderFormatter] = {
    "dollar": default_placeholder_string,
    "qmark": qmark_placeholder,
    "format": format_placeholder,
    "numeric": numeric_placeholder,
}


def placeholder_for_paramstyle(paramstyle: str) -> PlaceholderFormatter:
    """
    Returns the placeholder formatter for a DB-API paramstyle name.
    """
    try:
        return PARAMSTYLES[paramstyle]
    except KeyError:
        raise ValueError(
            f"Unsupported paramstyle '{paramstyle}'. Expected one of: {', '.join(sorted(PARAMSTYLES))}."
        ) from None


def escape_percent(fragment: str) -> str:
    """
    Doubles '%' so literal text survives drivers using the 'format' paramstyle.
    """
    return fragment.replace("%", "%%")
