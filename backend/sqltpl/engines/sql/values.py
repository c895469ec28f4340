"""
Argument value kinds and the skip marker.

``classify`` maps any Python object onto the closed ``ValueKind`` set the
formatter dispatches on. ``bool`` is checked before ``int`` since it is an
``int`` subclass.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any


class SkipType:
    """Type of the single skip marker; see ``SKIP``."""

    _instance: "SkipType | None" = None

    def __new__(cls) -> "SkipType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SKIP"

    def __reduce__(self) -> str:
        return "SKIP"


SKIP = SkipType()


class ValueKind(str, Enum):
    NULL = "null"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    ARRAY = "array"
    STRING = "string"
    SKIP = "skip"


def classify(value: Any) -> ValueKind:
    """Return the kind of *value*; anything unrecognised is a STRING."""
    if value is None:
        return ValueKind.NULL
    if value is SKIP:
        return ValueKind.SKIP
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, int):
        return ValueKind.INT
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, (list, tuple, Mapping)):
        return ValueKind.ARRAY
    return ValueKind.STRING


def is_associative(value: Any) -> bool:
    """True for a mapping whose keys are not exactly ``0, 1, ..., n-1`` in order."""
    if not isinstance(value, Mapping):
        return False
    return list(value.keys()) != list(range(len(value)))
