"""Key resolution for scanned translation-function calls.

Classifies a ScannedCall as static (every argument is known at build time,
so the call can be extracted or inlined) or dynamic (left as a runtime
call). Classification is total and has no side effects: the same call
always yields the same outcome.

Argument positions:
    0 - key, optionally followed by the key/value separator and a default
    1 - interpolation parameters object
    2 - reserved (must not be dynamic)
    3 - single-locale override

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from speakinline.constants import DEFAULT_KEY_SEPARATOR, DEFAULT_KEY_VALUE_SEPARATOR
from speakinline.enums import ArgumentKind, SkipReason
from speakinline.syntax.scanner import (
    ScannedCall,
    classify_argument,
    split_arguments,
    string_value,
)

__all__ = [
    "DynamicCall",
    "Resolution",
    "StaticCall",
    "get_key",
    "multilingual",
    "parse_param_names",
    "resolve_call",
    "split_key",
]

_DYNAMIC_KINDS: frozenset[ArgumentKind] = frozenset(
    {ArgumentKind.IDENTIFIER, ArgumentKind.CALL, ArgumentKind.EXPRESSION}
)

# Argument texts that stand for "no parameters" in source and minified output.
_ABSENT: frozenset[str] = frozenset({"undefined", "null", "void 0"})

# ${...} after an even run of backslashes, searched in the undecoded literal body
_PLACEHOLDER = re.compile(r"(?<!\\)(?:\\\\)*\$\{.*\}", re.DOTALL)

# name: value, 'name': value, "name": value
_PROPERTY = re.compile(r"""([A-Za-z_$][\w$]*|'[^'\\]*'|"[^"\\]*")\s*:""")
_SHORTHAND = re.compile(r"[A-Za-z_$][\w$]*")


@dataclass(frozen=True, slots=True)
class StaticCall:
    """A call whose key, parameters and locale are all literal.

    Attributes:
        call: The scanned call this outcome was derived from
        key: Canonical dotted key (default value removed)
        default_value: Inline default after the key/value separator, if any
        params: (property name, value expression) pairs of the parameters
            object, or None if the call passes no parameters
        lang: Locale the call is restricted to, or None for all locales
    """

    call: ScannedCall
    key: str
    default_value: str | None = None
    params: tuple[tuple[str, str], ...] | None = None
    lang: str | None = None


@dataclass(frozen=True, slots=True)
class DynamicCall:
    """A call that must stay a runtime call.

    Attributes:
        call: The scanned call this outcome was derived from
        reason: Which argument made the call dynamic
    """

    call: ScannedCall
    reason: SkipReason


type Resolution = StaticCall | DynamicCall
"""Outcome of resolving one scanned call."""


def split_key(raw: str, key_value_separator: str = DEFAULT_KEY_VALUE_SEPARATOR) -> tuple[str, str | None]:
    """Split a key argument value into key and inline default.

    Only the first separator counts; the default may contain further
    separators.

    Example:
        >>> split_key("app.title@@Qwik Speak")
        ('app.title', 'Qwik Speak')
        >>> split_key("a@@b@@c")
        ('a', 'b@@c')
        >>> split_key("app.title")
        ('app.title', None)
    """
    key, found, default_value = raw.partition(key_value_separator)
    return key, default_value if found else None


def get_key(argument: str, key_value_separator: str = DEFAULT_KEY_VALUE_SEPARATOR) -> str:
    """Return the key of a quoted key argument, without quotes and default."""
    return split_key(string_value(argument), key_value_separator)[0]


def multilingual(argument: str | None, supported_langs: Sequence[str]) -> str | None:
    """Return the locale a literal override argument selects, if supported.

    Args:
        argument: Raw text of argument 3, or None if absent
        supported_langs: Configured locales

    Returns:
        The matching locale, or None if absent, not a string literal, or
        not one of supported_langs
    """
    if argument is None:
        return None
    if classify_argument(argument) not in (ArgumentKind.STRING, ArgumentKind.TEMPLATE):
        return None
    lang = string_value(argument)
    return lang if lang in supported_langs else None


def parse_param_names(argument: str) -> tuple[tuple[str, str], ...] | None:
    """Parse the top-level properties of an object literal.

    Args:
        argument: Raw object literal text, braces included

    Returns:
        (name, value expression) pairs in source order, or None if the
        object is empty or has a property that is not a plain
        ``name: value`` or shorthand ``name`` (spread, computed key, method)

    Example:
        >>> parse_param_names("{ name: 'Qwik', count: items.length }")
        (('name', "'Qwik'"), ('count', 'items.length'))
        >>> parse_param_names("{ ...rest }") is None
        True
    """
    properties = split_arguments(argument.strip()[1:-1])
    if not properties:
        return None
    params: list[tuple[str, str]] = []
    for prop in properties:
        if _SHORTHAND.fullmatch(prop):
            params.append((prop, prop))
            continue
        match = _PROPERTY.match(prop)
        if match is None:
            return None
        name = match.group(1)
        if name[0] in ("'", '"'):
            name = name[1:-1]
        value = prop[match.end() :].strip()
        if not value:
            return None
        params.append((name, value))
    return tuple(params)


def _resolve_key(
    call: ScannedCall, key_separator: str, key_value_separator: str
) -> tuple[str, str | None] | SkipReason:
    argument = call.argument(0)
    if argument is None:
        return SkipReason.MISSING_KEY
    if classify_argument(argument) not in (ArgumentKind.STRING, ArgumentKind.TEMPLATE):
        return SkipReason.DYNAMIC_KEY
    if _PLACEHOLDER.search(argument[1:-1]):
        return SkipReason.INTERPOLATED_KEY
    key, default_value = split_key(string_value(argument), key_value_separator)
    if not all(key.split(key_separator)):
        return SkipReason.INVALID_KEY
    return key, default_value


def resolve_call(
    call: ScannedCall,
    supported_langs: Sequence[str] = (),
    *,
    key_separator: str = DEFAULT_KEY_SEPARATOR,
    key_value_separator: str = DEFAULT_KEY_VALUE_SEPARATOR,
) -> Resolution:
    """Classify one scanned call and extract its semantic fields.

    Args:
        call: Call produced by scan_calls()
        supported_langs: Locales a literal override argument may select
        key_separator: Separator between dotted key segments
        key_value_separator: Separator between key and inline default

    Returns:
        StaticCall if every argument is known at build time, otherwise
        DynamicCall carrying the first reason found
    """
    resolved_key = _resolve_key(call, key_separator, key_value_separator)
    if isinstance(resolved_key, SkipReason):
        return DynamicCall(call, resolved_key)
    key, default_value = resolved_key

    params: tuple[tuple[str, str], ...] | None = None
    params_argument = call.argument(1)
    if params_argument is not None and params_argument not in _ABSENT:
        if classify_argument(params_argument) is not ArgumentKind.OBJECT:
            return DynamicCall(call, SkipReason.DYNAMIC_PARAMS)
        params = parse_param_names(params_argument)
        if params is None:
            return DynamicCall(call, SkipReason.DYNAMIC_PARAMS)

    for index in (2, 3):
        argument = call.argument(index)
        if argument is not None and classify_argument(argument) in _DYNAMIC_KINDS:
            return DynamicCall(call, SkipReason.DYNAMIC_ARGUMENT)

    return StaticCall(
        call=call,
        key=key,
        default_value=default_value,
        params=params,
        lang=multilingual(call.argument(3), supported_langs),
    )
