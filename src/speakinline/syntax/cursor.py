"""Immutable cursor over JavaScript/TypeScript source text.

Implements the immutable cursor pattern used by the call-expression
scanner. Every advance() returns a NEW cursor, so a scanning loop that
forgets to reassign stops making progress instead of looping forever.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

__all__ = ["Cursor"]

# Whitespace recognized between tokens of a call expression.
_WHITESPACE: frozenset[str] = frozenset(" \t\n\r\f\v\u00a0\ufeff")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("t('a')", 0)
        >>> cursor.current
        't'
        >>> cursor.advance().current
        '('
        >>> cursor.current  # Original unchanged
        't'
        >>> Cursor("t", 1).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """True if position >= source length."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected EOF at position {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Returns:
            Character at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions (clamped at EOF)."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def skip_whitespace(self) -> "Cursor":
        """Skip JavaScript whitespace (spaces, tabs, line endings, NBSP, BOM).

        Example:
            >>> Cursor("  \\n\\t x", 0).skip_whitespace().current
            'x'
        """
        c = self
        while not c.is_eof and c.current in _WHITESPACE:
            c = c.advance()
        return c

    def skip_to_line_end(self) -> "Cursor":
        """Advance to the next line ending character (not consumed)."""
        end = self.source.find("\n", self.pos)
        return Cursor(self.source, len(self.source) if end < 0 else end)
