"""
List the placeholders of a raw template.

Used by callers that want to know how many arguments a template expects
before building it.
"""

from typing import NamedTuple

from sqltpl.engines.sql.template_engine import (
    BLOCK_PATTERN,
    PLACEHOLDER_PATTERN,
    resolve_blocks,
)


class Placeholder(NamedTuple):
    position: int
    tag: str | None
    in_block: bool


def parse_placeholders(template: str) -> list[Placeholder]:
    """
    Return every placeholder in *template* in scan order.

    ``in_block`` is True for placeholders inside a ``{...}`` block, i.e. the
    ones that disappear when the skip marker is passed.
    """
    spans = [(m.start(), m.end()) for m in BLOCK_PATTERN.finditer(template)]
    out: list[Placeholder] = []
    for m in PLACEHOLDER_PATTERN.finditer(template):
        pos = m.start()
        in_block = any(start < pos < end for start, end in spans)
        out.append(Placeholder(pos, m.group(1), in_block))
    return out


def count_arguments(template: str, *, skip: bool = False) -> int:
    """Number of arguments consumed by *template* (blocks dropped when *skip*)."""
    return len(PLACEHOLDER_PATTERN.findall(resolve_blocks(template, skip)))
