"""Expression scanner for translation-function calls.

Locates calls of the translation function in raw JavaScript/TypeScript
text without building an AST. A call is accepted only when its argument
list closes with balanced delimiters; string, template and comment
contents never count as delimiters.

Grammar recognized (informal):
    call      := alias ws* "(" balanced* ")"
    balanced  := string | template | comment | "(" balanced* ")"
               | "[" balanced* "]" | "{" balanced* "}" | other-char
    template  := "`" (escape | "${" balanced* "}" | other-char)* "`"

Anything the grammar cannot confirm (unterminated string, mismatched
closer, EOF before the closing parenthesis) discards the match.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from speakinline.constants import MAX_DEPTH, TRANSLATE_FN
from speakinline.enums import ArgumentKind
from speakinline.syntax.cursor import Cursor

if TYPE_CHECKING:
    from collections.abc import Iterator

__all__ = [
    "ScannedCall",
    "classify_argument",
    "decode_escapes",
    "find_translate_alias",
    "scan_calls",
    "skip_balanced",
    "skip_string",
    "skip_template",
    "split_arguments",
    "string_value",
]

_CLOSERS: dict[str, str] = {"(": ")", "[": "]", "{": "}"}

_IDENTIFIER = r"[A-Za-z_$][\w$]*"

# props.key, a?.b
_MEMBER_PATTERN = re.compile(rf"{_IDENTIFIER}(?:\s*\??\.\s*{_IDENTIFIER})*")

# Constants a minifier may leave in argument position.
_LITERAL_PATTERN = re.compile(
    r"-?(?:\d[\d_]*(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?n?"
    r"|0[xXoObB][\da-fA-F_]+n?"
    r"|true|false|null|undefined|void 0|!0|!1"
)


@dataclass(frozen=True, slots=True)
class ScannedCall:
    """One translation-function call found in source text.

    Attributes:
        text: Exact matched text, from the alias to the closing parenthesis
        start: Offset of the first character of text in the source
        end: Offset one past the closing parenthesis
        alias: Callee name the call was matched under
        arguments: Top-level argument texts, stripped, in call order
        line: 1-indexed line of start
    """

    text: str
    start: int
    end: int
    alias: str
    arguments: tuple[str, ...]
    line: int = 1

    def argument(self, index: int) -> str | None:
        """Return the raw text of argument ``index``, or None if absent."""
        if index < len(self.arguments):
            return self.arguments[index]
        return None


# ============================================================================
# DELIMITER SKIPPING
# ============================================================================


def skip_string(cursor: Cursor) -> Cursor | None:
    """Skip a single or double quoted string starting at cursor.

    Args:
        cursor: Positioned on the opening quote

    Returns:
        Cursor just past the closing quote, or None if the string is
        unterminated (EOF or a raw line break before the closing quote)
    """
    quote = cursor.current
    c = cursor.advance()
    while not c.is_eof:
        char = c.current
        if char == "\\":
            c = c.advance(2)
            continue
        if char == quote:
            return c.advance()
        if char == "\n":
            return None
        c = c.advance()
    return None


def skip_template(cursor: Cursor, depth: int = 0) -> Cursor | None:
    """Skip a template literal starting at cursor, including ${...} parts.

    Args:
        cursor: Positioned on the opening backtick
        depth: Current nesting depth (guards against pathological input)

    Returns:
        Cursor just past the closing backtick, or None if unterminated
    """
    if depth > MAX_DEPTH:
        return None
    c = cursor.advance()
    while not c.is_eof:
        char = c.current
        if char == "\\":
            c = c.advance(2)
            continue
        if char == "`":
            return c.advance()
        if char == "$" and c.peek(1) == "{":
            after = skip_balanced(c.advance(), depth + 1)
            if after is None:
                return None
            c = after
            continue
        c = c.advance()
    return None


def _skip_comment(cursor: Cursor) -> Cursor | None:
    """Skip a // or /* */ comment, or return None if cursor is not on one."""
    if cursor.peek(1) == "/":
        return cursor.skip_to_line_end()
    if cursor.peek(1) == "*":
        end = cursor.source.find("*/", cursor.pos + 2)
        if end < 0:
            return None
        return Cursor(cursor.source, end + 2)
    return None


def skip_balanced(cursor: Cursor, depth: int = 0) -> Cursor | None:
    """Skip a delimited group starting at an opening (, [ or {.

    Args:
        cursor: Positioned on the opening delimiter
        depth: Current nesting depth (guards against pathological input)

    Returns:
        Cursor just past the matching closer, or None if the group is not
        balanced before EOF
    """
    if depth > MAX_DEPTH:
        return None
    closer = _CLOSERS[cursor.current]
    c = cursor.advance()
    while not c.is_eof:
        char = c.current
        if char == closer:
            return c.advance()
        if char in _CLOSERS:
            after = skip_balanced(c, depth + 1)
        elif char in ("'", '"'):
            after = skip_string(c)
        elif char == "`":
            after = skip_template(c, depth + 1)
        elif char in ")]}":
            # Mismatched closer
            return None
        elif char == "/" and c.peek(1) in ("/", "*"):
            after = _skip_comment(c)
        else:
            c = c.advance()
            continue
        if after is None:
            return None
        c = after
    return None


# ============================================================================
# ARGUMENTS
# ============================================================================


def split_arguments(text: str) -> list[str] | None:
    """Split an argument list on top-level commas only.

    Commas inside quoted strings, template literals, comments, and
    parenthesized, bracketed or braced groups are not separators.

    Args:
        text: Argument list text without the enclosing parentheses

    Returns:
        Stripped argument texts (a trailing empty argument is dropped), or
        None if text contains an unbalanced group or unterminated string

    Example:
        >>> split_arguments("'key', { a: 'x, y', b: 2 }")
        ["'key'", "{ a: 'x, y', b: 2 }"]
    """
    arguments: list[str] = []
    start = 0
    c = Cursor(text, 0)
    while not c.is_eof:
        char = c.current
        if char == ",":
            arguments.append(text[start : c.pos].strip())
            c = c.advance()
            start = c.pos
            continue
        if char in _CLOSERS:
            after = skip_balanced(c)
        elif char in ("'", '"'):
            after = skip_string(c)
        elif char == "`":
            after = skip_template(c)
        elif char in ")]}":
            return None
        elif char == "/" and c.peek(1) in ("/", "*"):
            after = _skip_comment(c)
        else:
            c = c.advance()
            continue
        if after is None:
            return None
        c = after
    last = text[start:].strip()
    if last or arguments:
        arguments.append(last)
    if arguments and not arguments[-1]:
        arguments.pop()
    return arguments


def _spans_whole(text: str, after: Cursor | None) -> bool:
    return after is not None and after.pos == len(text)


def classify_argument(text: str) -> ArgumentKind:
    """Classify raw argument text by its outermost syntactic shape.

    Example:
        >>> classify_argument("'home.title'")
        <ArgumentKind.STRING: 'string'>
        >>> classify_argument("props.key")
        <ArgumentKind.IDENTIFIER: 'identifier'>
        >>> classify_argument("'a' + b")
        <ArgumentKind.EXPRESSION: 'expression'>
    """
    if not text:
        return ArgumentKind.EXPRESSION
    first = text[0]
    if first in ("'", '"'):
        if _spans_whole(text, skip_string(Cursor(text, 0))):
            return ArgumentKind.STRING
        return ArgumentKind.EXPRESSION
    if first == "`":
        if _spans_whole(text, skip_template(Cursor(text, 0))):
            return ArgumentKind.TEMPLATE
        return ArgumentKind.EXPRESSION
    if first == "{":
        if _spans_whole(text, skip_balanced(Cursor(text, 0))):
            return ArgumentKind.OBJECT
        return ArgumentKind.EXPRESSION
    if _LITERAL_PATTERN.fullmatch(text):
        return ArgumentKind.LITERAL
    if _MEMBER_PATTERN.fullmatch(text):
        return ArgumentKind.IDENTIFIER
    callee = _MEMBER_PATTERN.match(text)
    if callee is not None:
        c = Cursor(text, callee.end()).skip_whitespace()
        if not c.is_eof and c.current == "(" and _spans_whole(text, skip_balanced(c)):
            return ArgumentKind.CALL
    return ArgumentKind.EXPRESSION


def string_value(text: str) -> str:
    """Return the value of a quoted or template literal.

    Quotes are removed and escape sequences decoded, so the value is the
    string the literal denotes at runtime.

    Example:
        >>> string_value("'It\\\\'s fine'")
        "It's fine"
        >>> string_value("'caf\\\\u00e9'")
        'café'
    """
    return decode_escapes(text[1:-1])


_SIMPLE_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

# \u{1F600}, \u00e9, \xe9, line continuation, any other escaped character
_ESCAPE_PATTERN = re.compile(
    r"\\(u\{[0-9a-fA-F]{1,6}\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])"
)


def _decode_escape(match: re.Match[str]) -> str:
    escape = match.group(1)
    if escape[0] in "ux" and len(escape) > 1:
        digits = escape[2:-1] if escape[1] == "{" else escape[1:]
        code = int(digits, 16)
        return chr(code) if code <= 0x10FFFF else match.group(0)
    if escape in ("\n", "\r", "\r\n", "\u2028", "\u2029"):
        return ""
    return _SIMPLE_ESCAPES.get(escape, escape)


def decode_escapes(body: str) -> str:
    r"""Decode JavaScript string escape sequences.

    Handles \n \t \r \b \f \v \0, \xHH, \uHHHH, \u{H...}, line
    continuations and identity escapes (\' \" \` \\ \$). Surrogate pairs
    written as two \uHHHH escapes are combined; a lone surrogate becomes
    U+FFFD.
    """
    if "\\" not in body:
        return body
    decoded = _ESCAPE_PATTERN.sub(_decode_escape, body)
    return decoded.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


# ============================================================================
# CALL DISCOVERY
# ============================================================================


def find_translate_alias(source: str, name: str = TRANSLATE_FN) -> str:
    """Find the local alias the translation function is imported under.

    Recognizes import renaming (``import { $translate as t }``) and
    destructuring (``const { $translate: t } = ...``).

    Args:
        source: File or chunk text
        name: Canonical exported name of the translation function

    Returns:
        The alias, or ``name`` itself if no renaming is found
    """
    escaped = re.escape(name)
    patterns = (
        rf"(?<![\w$]){escaped}\s+as\s+({_IDENTIFIER})",
        rf"[{{,]\s*{escaped}\s*:\s*({_IDENTIFIER})",
    )
    for pattern in patterns:
        match = re.search(pattern, source)
        if match is not None:
            return match.group(1)
    return name


def scan_calls(source: str, alias: str = TRANSLATE_FN) -> Iterator[ScannedCall]:
    """Yield non-overlapping calls of ``alias`` in source order.

    Member calls (``obj.t(...)``) and identifiers that merely end with the
    alias (``format(...)`` for alias ``t``) are not matched. Calls nested in
    the arguments of a matched call belong to the outer match.

    Args:
        source: File or chunk text
        alias: Local name of the translation function

    Yields:
        ScannedCall for every call whose parentheses balance
    """
    pattern = re.compile(rf"(?<![\w$.]){re.escape(alias)}\s*\(")
    line = 1
    counted = 0
    pos = 0
    while True:
        match = pattern.search(source, pos)
        if match is None:
            return
        open_paren = Cursor(source, match.end() - 1)
        after = skip_balanced(open_paren)
        if after is None:
            pos = match.end()
            continue
        arguments = split_arguments(source[match.end() : after.pos - 1])
        if arguments is None:
            pos = match.end()
            continue
        line += source.count("\n", counted, match.start())
        counted = match.start()
        yield ScannedCall(
            text=source[match.start() : after.pos],
            start=match.start(),
            end=after.pos,
            alias=alias,
            arguments=tuple(arguments),
            line=line,
        )
        pos = after.pos
