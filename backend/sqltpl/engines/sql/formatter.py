"""
Value formatting rules for the SQL template engine.

Renders one value (or one array of values) as SQL text:

* ``None`` -> ``NULL``; ``bool`` -> ``1``/``0``; numbers -> decimal text.
* Strings (and any other object, via ``str()``) -> passed through the
  client's escape primitive, remaining bare quotes backslash-escaped, then
  wrapped in single quotes.
* Identifiers -> backtick-quoted with embedded backticks doubled.

Nothing user-controlled reaches the output without one of these two
escapes.
"""

import math
import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from sqltpl.core.errors import (
    EmptyArrayValueError,
    EmptyIdentifierError,
    UnknownTypeTagError,
    UnsupportedValueError,
)
from sqltpl.core.escaping import EscapeFunc, escape_quotes, resolve_escaper
from sqltpl.engines.sql.values import SKIP, ValueKind, classify, is_associative

# Leading numeric prefix of a string, as used by the d/f casts
_NUMERIC_PREFIX = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def _float_text(value: float) -> str:
    if not math.isfinite(value):
        raise UnsupportedValueError(f"Cannot render non-finite number: {value!r}")
    text = repr(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def _numeric_prefix(value: Any) -> str | None:
    m = _NUMERIC_PREFIX.match(str(value))
    return m.group(1) if m else None


def to_int(value: Any) -> int:
    """Cast to int, truncating. Non-numeric strings give 0."""
    kind = classify(value)
    if kind is ValueKind.ARRAY:
        raise UnsupportedValueError("Cannot cast an array to integer")
    if kind in (ValueKind.BOOL, ValueKind.INT):
        return int(value)
    if kind is ValueKind.FLOAT or isinstance(value, Decimal):
        if not math.isfinite(value):
            raise UnsupportedValueError(f"Cannot render non-finite number: {value!r}")
        return int(value)
    prefix = _numeric_prefix(value)
    if prefix is None:
        return 0
    try:
        if any(c in prefix for c in ".eE"):
            return int(float(prefix))
        return int(prefix)
    except (OverflowError, ValueError) as e:
        raise UnsupportedValueError(f"Cannot cast to integer: {e}") from e


def _int_text(value: int) -> str:
    try:
        return str(value)
    except ValueError as e:
        raise UnsupportedValueError(f"Cannot render integer: {e}") from e


def to_float(value: Any) -> float:
    """Cast to float. Non-numeric strings give 0.0."""
    kind = classify(value)
    if kind is ValueKind.ARRAY:
        raise UnsupportedValueError("Cannot cast an array to float")
    if kind in (ValueKind.BOOL, ValueKind.INT, ValueKind.FLOAT) or isinstance(value, Decimal):
        return float(value)
    prefix = _numeric_prefix(value)
    return float(prefix) if prefix is not None else 0.0


class ValueFormatter:
    """Stateless rendering of values and identifiers.

    *escaper* is the client's raw string escape primitive; see
    ``sqltpl.core.escaping.resolve_escaper`` for accepted forms.
    """

    def __init__(self, escaper: Any = None) -> None:
        self._escape: EscapeFunc = resolve_escaper(escaper)

    def escape_string(self, value: str) -> str:
        return self._escape(value)

    def format_value(self, value: Any) -> str:
        """Render a scalar with type-directed default rules."""
        kind = classify(value)
        if kind is ValueKind.NULL:
            return "NULL"
        if kind is ValueKind.BOOL:
            return "1" if value else "0"
        if kind is ValueKind.INT:
            return _int_text(int(value))
        if kind is ValueKind.FLOAT:
            return _float_text(value)
        if kind is ValueKind.ARRAY:
            raise UnsupportedValueError(
                "Nested arrays are not supported; use ?a for a flat list"
            )
        if kind is ValueKind.SKIP:
            raise UnsupportedValueError("Skip marker cannot be rendered as a value")
        if kind is ValueKind.STRING:
            return "'" + escape_quotes(self.escape_string(str(value))) + "'"
        raise UnsupportedValueError(f"Unhandled value kind: {kind}")

    def format_identifier(self, name: Any) -> str:
        """Backtick-quote one identifier, doubling embedded backticks."""
        if isinstance(name, bool):
            text = "1" if name else "0"
        else:
            text = "" if name is None else str(name)
        if not text.strip():
            raise EmptyIdentifierError()
        return "`" + text.replace("`", "``") + "`"

    def format_identifiers(self, value: Any) -> str:
        """Identifier or list of identifiers, comma-joined."""
        kind = classify(value)
        if kind is ValueKind.ARRAY:
            names = list(value.values()) if isinstance(value, Mapping) else list(value)
            if not names:
                raise EmptyArrayValueError()
        else:
            names = [value]
        return ", ".join(self.format_identifier(n) for n in names)

    def format_array(self, value: Any) -> str:
        """SET list for associative arrays, IN list otherwise."""
        if classify(value) is not ValueKind.ARRAY:
            raise UnsupportedValueError(
                f"Expected an array for ?a, got {type(value).__name__}"
            )
        if not value:
            raise EmptyArrayValueError()
        if is_associative(value):
            return self.format_assoc_array(value)
        items = value.values() if isinstance(value, Mapping) else value
        return self.format_value_list(items)

    def format_assoc_array(self, value: Mapping) -> str:
        return ", ".join(
            f"{self.format_identifier(column)} = {self.format_value(v)}"
            for column, v in value.items()
        )

    def format_value_list(self, values: Any) -> str:
        return ", ".join(self.format_value(v) for v in values)

    def format_by_type(self, value: Any, tag: str | None) -> str:
        """Render *value* for placeholder type *tag* (``None`` = untagged)."""
        if value is SKIP:
            raise UnsupportedValueError("Skip marker cannot be rendered as a value")
        if tag is None or tag == "s":
            return self.format_value(value)
        if tag == "d":
            return "NULL" if value is None else _int_text(to_int(value))
        if tag == "f":
            return "NULL" if value is None else _float_text(to_float(value))
        if tag == "a":
            return self.format_array(value)
        if tag == "#":
            return self.format_identifiers(value)
        raise UnknownTypeTagError(tag)
