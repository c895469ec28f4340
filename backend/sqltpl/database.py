"""
Query builder facade.

    db = Database(pymysql_connection)
    sql = db.build_query(
        "SELECT name FROM users WHERE ?# IN (?a){ AND block = ?d}",
        ["user_id", [1, 2, 3], db.skip()],
    )
    # SELECT name FROM users WHERE `user_id` IN (1, 2, 3)

Building never touches the connection beyond its ``escape_string``.
"""

import logging
from collections.abc import Sequence
from typing import Any

from sqltpl.core.config import settings
from sqltpl.core.errors import EmptyTemplateError, QueryBuildError
from sqltpl.engines.sql import SKIP, SkipType, TemplateEngine, ValueFormatter

_log = logging.getLogger(__name__)


def _preview(text: str | None) -> str:
    text = text or ""
    limit = settings.SQL_LOG_PREVIEW_CHARS
    return text[:limit] + "..." if len(text) > limit else text


class Database:
    """
    build_query(template, args) -> SQL string; skip() -> block-elision marker.

    *client* supplies the escape primitive: a DB client with
    ``escape_string``, a callable, or None for pymysql's offline escaper.
    """

    def __init__(self, client: Any = None) -> None:
        self._engine = TemplateEngine(ValueFormatter(client))

    def build_query(self, template: str, args: Sequence[Any] | None = None) -> str:
        """Render *template* with positional *args* to a final SQL string."""
        _args = list(args) if args is not None else []
        try:
            if template is None or not template.strip():
                raise EmptyTemplateError()
            sql = self._engine.render(template, _args)
        except QueryBuildError as e:
            _log.debug("Query build failed: %s. Template: %s", e, _preview(template))
            raise
        if settings.SQL_LOG_QUERIES:
            _log.debug("Built SQL: %s", _preview(sql))
        return sql

    def skip(self) -> SkipType:
        """Marker that drops every ``{...}`` block when present in args."""
        return SKIP
