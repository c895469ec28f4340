"""
Placeholder SQL template engine.

Exports: TemplateEngine, ValueFormatter, parse_placeholders, SKIP.
"""

from sqltpl.engines.sql.formatter import ValueFormatter
from sqltpl.engines.sql.parser import Placeholder, count_arguments, parse_placeholders
from sqltpl.engines.sql.safety import check_template_safety
from sqltpl.engines.sql.template_engine import TemplateEngine
from sqltpl.engines.sql.values import SKIP, SkipType, ValueKind, classify

__all__ = [
    "TemplateEngine",
    "ValueFormatter",
    "Placeholder",
    "parse_placeholders",
    "count_arguments",
    "check_template_safety",
    "SKIP",
    "SkipType",
    "ValueKind",
    "classify",
]
