"""Per-run accumulation of counters and diagnostics.

A RunReport is created by each pipeline invocation and returned to the
caller, which decides when and how to report it. Nothing here is
process-global.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field

from speakinline.diagnostics.codes import Diagnostic
from speakinline.enums import IssueKind

__all__ = ["RunReport"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RunReport:
    """Counters and diagnostics of one extraction or inlining run.

    Attributes:
        keys: Statically resolvable keys extracted (extraction)
        inlined: Call sites replaced by a fallback chain (inlining)
        files: Source files or chunks processed
        diagnostics: Every non-fatal condition, in encounter order
    """

    keys: int = 0
    inlined: int = 0
    files: int = 0
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def add(self, diagnostic: Diagnostic) -> None:
        """Record a non-fatal condition."""
        self.diagnostics.append(diagnostic)

    def extend(self, other: RunReport) -> None:
        """Fold another report into this one (counters and diagnostics)."""
        self.keys += other.keys
        self.inlined += other.inlined
        self.files += other.files
        self.diagnostics.extend(other.diagnostics)

    def count(self, kind: IssueKind) -> int:
        """Return the number of diagnostics of the given kind."""
        return sum(1 for diagnostic in self.diagnostics if diagnostic.kind is kind)

    @property
    def dynamic(self) -> int:
        """Calls skipped because an argument is dynamic."""
        return self.count(IssueKind.DYNAMIC)

    @property
    def missing(self) -> int:
        """Missing values across all locales."""
        return self.count(IssueKind.MISSING_VALUE)

    def by_kind(self) -> dict[IssueKind, int]:
        """Return diagnostic counts keyed by kind (kinds with zero omitted)."""
        return dict(Counter(diagnostic.kind for diagnostic in self.diagnostics))

    def log_diagnostics(self, level: int = logging.DEBUG) -> None:
        """Emit one structured log line per diagnostic."""
        for diagnostic in self.diagnostics:
            logger.log(level, "%s", diagnostic.format_line())

    def log_summary(self) -> None:
        """Emit the end-of-run totals.

        Missing values, shape conflicts, skipped files and skipped partitions
        are logged at WARNING since they change what reaches the output; the
        rest at INFO.
        """
        if self.keys:
            logger.info("extracted keys: %d", self.keys)
        if self.dynamic:
            logger.info("skipped keys due to dynamic params: %d", self.dynamic)
        if self.inlined:
            logger.info("inlined calls: %d", self.inlined)
        for kind in (
            IssueKind.MISSING_VALUE,
            IssueKind.SHAPE_CONFLICT,
            IssueKind.READ_FAILURE,
            IssueKind.UNSAFE_PARTITION,
        ):
            total = self.count(kind)
            if total:
                logger.warning("%s: %d", kind, total)
