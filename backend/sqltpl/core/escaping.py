"""
String escape primitive supplied by the database client.

The query builder never opens connections. It only needs one function that
escapes a raw string for embedding in a single-quoted SQL literal. Accepted:

- an object with ``escape_string(str) -> str`` (a live pymysql connection
  qualifies and escapes according to its server charset/SQL mode);
- a plain callable ``str -> str``;
- ``None``: ``pymysql.converters.escape_string`` (backslash escaping, no
  connection required).
"""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from pymysql.converters import escape_string as _pymysql_escape_string

EscapeFunc = Callable[[str], str]


@runtime_checkable
class StringEscaper(Protocol):
    """Anything exposing a DB-API client style ``escape_string``."""

    def escape_string(self, s: str) -> str: ...


def resolve_escaper(client: Any = None) -> EscapeFunc:
    """Return the escape function for *client* (see module docstring)."""
    if client is None:
        return _pymysql_escape_string
    if isinstance(client, StringEscaper):
        return client.escape_string
    if callable(client):
        return client
    raise TypeError(
        "escaper must provide escape_string(), be callable, or be None; "
        f"got {type(client).__name__}"
    )


def escape_quotes(value: str) -> str:
    """Backslash-escape every single quote not already escaped.

    Existing backslash pairs are copied through untouched, so output from a
    backslash-escaping primitive is left as is while a bare ``'`` becomes
    ``\\'``. A dangling trailing backslash is doubled so it cannot swallow
    the closing quote.
    """
    if "'" not in value and not value.endswith("\\"):
        return value
    out: list[str] = []
    i = 0
    length = len(value)
    while i < length:
        ch = value[i]
        if ch == "\\":
            if i + 1 < length:
                out.append(value[i : i + 2])
                i += 2
                continue
            out.append("\\\\")
        elif ch == "'":
            out.append("\\'")
        else:
            out.append(ch)
        i += 1
    return "".join(out)
