"""Diagnostic data structures.

Defines the immutable record emitted for every non-fatal condition a
pipeline run encounters (dynamic calls, missing values, shape conflicts,
unreadable source files).

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from speakinline.enums import IssueKind

__all__ = ["Diagnostic"]


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured record of one non-fatal condition.

    Attributes:
        kind: Category of the condition
        message: Human-readable description
        locale: Locale the condition applies to (None if locale-independent)
        key: Dotted translation key involved (None if not applicable)
        path: Source or asset file involved (None if not applicable)
        line: 1-indexed line of the call in ``path`` (None if unknown)
    """

    kind: IssueKind
    message: str
    locale: str | None = None
    key: str | None = None
    path: str | None = None
    line: int | None = None

    def __post_init__(self) -> None:
        """Validate Diagnostic invariants.

        Raises:
            ValueError: If line is given and less than 1 (lines are 1-indexed)
        """
        if self.line is not None and self.line < 1:
            msg = f"Diagnostic.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)

    def __str__(self) -> str:
        """Return human-readable description."""
        return self.message

    def format_line(self) -> str:
        """Format as a single structured log line.

        Example output:
            missing_value locale=it-IT key=home.title: no value
            dynamic path=src/app.tsx:12: first argument is not a string literal

        Returns:
            Formatted line with kind, context fields and message
        """
        parts = [str(self.kind)]
        if self.locale is not None:
            parts.append(f"locale={self.locale}")
        if self.key is not None:
            parts.append(f"key={self.key}")
        if self.path is not None:
            location = self.path if self.line is None else f"{self.path}:{self.line}"
            parts.append(f"path={location}")
        return f"{' '.join(parts)}: {self.message}"
