"""Placeholder interpolation for translation values.

Translation values reference parameters as ``{{ name }}`` (whitespace
inside the braces optional). Two substitutions share the same
placeholder syntax:

- transpile_params: runtime-style, replaces placeholders with concrete
  parameter values.
- interpolate_placeholders: build-time, replaces placeholders with
  ``${expression}`` so the generated template literal evaluates the
  parameter expression where the call used to be.

Placeholders without a matching parameter are left untouched.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

__all__ = [
    "PLACEHOLDER_PATTERN",
    "escape_template",
    "interpolate_param",
    "interpolate_placeholders",
    "quote_locale",
    "quote_value",
    "transpile_params",
]

PLACEHOLDER_PATTERN: re.Pattern[str] = re.compile(r"\{\{\s*([^{}\s]*)\s*\}\}")


def transpile_params(value: str, params: Mapping[str, object]) -> str:
    """Replace every ``{{ name }}`` whose name is in params with its value.

    Example:
        >>> transpile_params("Test {{ number }} {{param}}", {"number": 2, "param": "params"})
        'Test 2 params'
        >>> transpile_params("Hi {{who}}", {})
        'Hi {{who}}'
    """

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        return str(params[name]) if name in params else match.group(0)

    return PLACEHOLDER_PATTERN.sub(substitute, value)


def interpolate_param(expression: str) -> str:
    """Wrap a parameter expression as a template-literal substitution."""
    return "${" + expression + "}"


def interpolate_placeholders(value: str, params: Iterable[tuple[str, str]]) -> str:
    """Replace placeholders with ``${expression}`` for the matching parameter.

    Args:
        value: Translation value, already escaped with escape_template()
        params: (name, expression) pairs from the call's parameters object

    Example:
        >>> interpolate_placeholders("Hello {{ name }}!", [("name", "user.name")])
        'Hello ${user.name}!'
    """
    expressions = dict(params)

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in expressions:
            return interpolate_param(expressions[name])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(substitute, value)


def escape_template(value: str) -> str:
    """Escape text so it reads literally inside a template literal.

    Backslashes, backticks and ``${`` are escaped; ``{{ name }}``
    placeholders are not affected.

    Example:
        >>> escape_template("Use `code` and ${x}")
        'Use \\\\`code\\\\` and \\\\${x}'
    """
    return value.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


def quote_value(value: str) -> str:
    """Wrap an escaped value in backticks, ready for inlining."""
    return "`" + value + "`"


def quote_locale(lang: str) -> str:
    """Quote a locale identifier as a single-quoted string literal."""
    return "'" + lang.replace("\\", "\\\\").replace("'", "\\'") + "'"
