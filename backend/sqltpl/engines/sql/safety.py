"""
Static analysis for placeholder templates.

Flags constructs the engine accepts but probably does not do what the author
meant:

- nested ``{ { } }`` blocks: only the innermost span is treated as a block,
  the outer braces end up in the SQL verbatim;
- unbalanced braces: a stray ``{`` or ``}`` is emitted as-is;
- untagged ``?`` placeholders: the rendering depends on the runtime type of
  the argument (a string ``"5"`` renders ``'5'``, not ``5``).

Usage::

    warnings = check_template_safety(template)
    # [{"line": 1, "message": "..."}]
"""

from typing import Any

from sqltpl.engines.sql.template_engine import PLACEHOLDER_PATTERN


def _brace_warnings(template: str) -> list[dict[str, Any]]:
    warnings: list[dict[str, Any]] = []
    depth = 0
    line_no = 1
    for ch in template:
        if ch == "\n":
            line_no += 1
        elif ch == "{":
            depth += 1
            if depth == 2:
                warnings.append(
                    {
                        "line": line_no,
                        "message": "Nested conditional block; blocks cannot nest.",
                    }
                )
        elif ch == "}":
            if depth == 0:
                warnings.append(
                    {"line": line_no, "message": "Unmatched '}' is emitted verbatim."}
                )
            else:
                depth -= 1
    if depth > 0:
        warnings.append(
            {"line": line_no, "message": f"{depth} unclosed '{{' emitted verbatim."}
        )
    return warnings


def check_template_safety(template: str) -> list[dict[str, Any]]:
    """Analyse a template and return warnings; an empty list means no issues.

    Each warning is a dict with ``line`` and ``message`` keys.
    """
    warnings = _brace_warnings(template)
    for line_no, line_text in enumerate(template.split("\n"), start=1):
        for m in PLACEHOLDER_PATTERN.finditer(line_text):
            if m.group(1) is None:
                warnings.append(
                    {
                        "line": line_no,
                        "message": (
                            "Untagged '?' placeholder; its rendering depends on the "
                            "argument's runtime type. Consider ?d, ?f, ?s, ?a or ?#."
                        ),
                    }
                )
    warnings.sort(key=lambda w: w["line"])
    return warnings
