"""
Errors raised while building a query from a template.

Every error is terminal for the ``build_query`` call that raised it; no
partial SQL is returned.
"""

from __future__ import annotations


class QueryBuildError(ValueError):
    """Base class for all query build failures."""

    pass


class EmptyTemplateError(QueryBuildError):
    """Template is empty or whitespace-only."""

    def __init__(self) -> None:
        super().__init__("SQL query template cannot be empty")


class MissingArgumentError(QueryBuildError):
    """A placeholder has no argument at its position."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"Missing argument at index {index}")


class EmptyArrayValueError(QueryBuildError):
    """An array value (or identifier list) to format is empty."""

    def __init__(self) -> None:
        super().__init__("Array for formatting cannot be empty")


class EmptyIdentifierError(QueryBuildError):
    """An identifier to format is empty or whitespace-only."""

    def __init__(self) -> None:
        super().__init__("Identifier for formatting cannot be empty")


class UnexpectedSkipError(QueryBuildError):
    """The skip sentinel reached placeholder rendering."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(
            f"Skip marker at index {index} cannot be rendered as a value; "
            "it is only valid as a signal to drop conditional blocks"
        )


class UnsupportedValueError(QueryBuildError):
    """A value cannot be rendered under the requested type tag."""

    pass


class UnknownTypeTagError(QueryBuildError):
    """A type tag outside ``d f a # s``."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"Unknown placeholder type: {tag!r}")
