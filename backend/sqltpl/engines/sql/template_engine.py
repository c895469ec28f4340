"""
Placeholder template engine.

Two sequential left-to-right passes over the template:

1. Conditional blocks ``{...}`` (no nesting) are kept with braces stripped,
   or all dropped when the skip marker appears anywhere in ``args``. The
   flag is global: one marker drops *every* block in the template.
2. Placeholders ``?``, ``?d``, ``?f``, ``?a``, ``?#``, ``?s`` in the result
   of pass 1 consume ``args`` in order, each rendered by ``ValueFormatter``.

Performance: the split of a pass-1 string into literal chunks and
placeholder tags is cached in an LRU dict keyed by source hash, so repeated
builds of the same template only do the value rendering.
"""

import hashlib
import logging
import re
import threading
from collections import OrderedDict
from collections.abc import Sequence
from typing import Any, NamedTuple

from sqltpl.core.config import settings
from sqltpl.core.errors import MissingArgumentError, UnexpectedSkipError
from sqltpl.engines.sql.formatter import ValueFormatter
from sqltpl.engines.sql.values import SKIP, ValueKind, classify

_log = logging.getLogger(__name__)

BLOCK_PATTERN = re.compile(r"\{([^{}]*)\}")
PLACEHOLDER_PATTERN = re.compile(r"\?([dfa#s])?")

_INFERRED_TAGS: dict[ValueKind, str | None] = {
    ValueKind.NULL: None,
    ValueKind.BOOL: None,
    ValueKind.INT: "d",
    ValueKind.FLOAT: "f",
    ValueKind.ARRAY: "a",
    ValueKind.STRING: "s",
    ValueKind.SKIP: None,
}


class CompiledQuery(NamedTuple):
    """Pass-1 output split around its placeholders.

    ``chunks`` has one more element than ``tags``; placeholder *i* sits
    between ``chunks[i]`` and ``chunks[i + 1]``.
    """

    chunks: tuple[str, ...]
    tags: tuple[str | None, ...]


_template_cache: OrderedDict[str, CompiledQuery] = OrderedDict()
_cache_lock = threading.Lock()


def clear_cache() -> None:
    with _cache_lock:
        _template_cache.clear()


def has_skip(args: Sequence[Any]) -> bool:
    return any(a is SKIP for a in args)


def resolve_blocks(template: str, elide: bool) -> str:
    """Pass 1: drop every ``{...}`` span when *elide*, else unwrap it."""
    if elide:
        return BLOCK_PATTERN.sub("", template)
    return BLOCK_PATTERN.sub(lambda m: m.group(1), template)


def compile_placeholders(source: str) -> CompiledQuery:
    chunks: list[str] = []
    tags: list[str | None] = []
    pos = 0
    for m in PLACEHOLDER_PATTERN.finditer(source):
        chunks.append(source[pos : m.start()])
        tags.append(m.group(1))
        pos = m.end()
    chunks.append(source[pos:])
    return CompiledQuery(tuple(chunks), tuple(tags))


def _compile_cached(source: str) -> CompiledQuery:
    """Return the compiled form of *source* from cache or compile & cache it."""
    max_size = settings.SQL_TEMPLATE_CACHE_SIZE
    if max_size <= 0:
        return compile_placeholders(source)
    key = hashlib.md5(source.encode(), usedforsecurity=False).hexdigest()
    with _cache_lock:
        compiled = _template_cache.get(key)
        if compiled is not None:
            _template_cache.move_to_end(key)
            return compiled
    compiled = compile_placeholders(source)
    with _cache_lock:
        _template_cache[key] = compiled
        while len(_template_cache) > max_size:
            _template_cache.popitem(last=False)
    return compiled


def infer_tag(value: Any) -> str | None:
    return _INFERRED_TAGS[classify(value)]


class TemplateEngine:
    """Resolves conditional blocks and placeholders against positional args."""

    def __init__(self, formatter: ValueFormatter | None = None) -> None:
        self.formatter = formatter or ValueFormatter()

    def render(self, template: str, args: Sequence[Any]) -> str:
        source = resolve_blocks(template, has_skip(args))
        return self.substitute(source, args)

    def substitute(self, source: str, args: Sequence[Any]) -> str:
        """Pass 2: replace placeholders in *source*, consuming *args* in order."""
        compiled = _compile_cached(source)
        parts: list[str] = [compiled.chunks[0]]
        index = 0
        for tag, chunk in zip(compiled.tags, compiled.chunks[1:]):
            if index >= len(args):
                raise MissingArgumentError(index)
            value = args[index]
            index += 1
            if tag is None:
                tag = infer_tag(value)
            if value is SKIP:
                raise UnexpectedSkipError(index - 1)
            parts.append(self.formatter.format_by_type(value, tag))
            parts.append(chunk)
        return "".join(parts)
