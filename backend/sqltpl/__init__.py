"""
Placeholder SQL query builder.

Templates use ``?`` / ``?d`` / ``?f`` / ``?a`` / ``?#`` / ``?s`` placeholders
and ``{...}`` conditional blocks; see ``sqltpl.database.Database``.
"""

from sqltpl.core.errors import (
    EmptyArrayValueError,
    EmptyIdentifierError,
    EmptyTemplateError,
    MissingArgumentError,
    QueryBuildError,
    UnexpectedSkipError,
    UnknownTypeTagError,
    UnsupportedValueError,
)
from sqltpl.database import Database
from sqltpl.engines.sql import SKIP

__all__ = [
    "Database",
    "SKIP",
    "QueryBuildError",
    "EmptyTemplateError",
    "MissingArgumentError",
    "EmptyArrayValueError",
    "EmptyIdentifierError",
    "UnexpectedSkipError",
    "UnsupportedValueError",
    "UnknownTypeTagError",
]
