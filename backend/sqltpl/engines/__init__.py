"""
Engines: placeholder SQL templates.
"""

from sqltpl.engines.sql import TemplateEngine, ValueFormatter, parse_placeholders

__all__ = [
    "TemplateEngine",
    "ValueFormatter",
    "parse_placeholders",
]
