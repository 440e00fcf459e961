"""Advisory locale checks backed by Babel.

The pipelines treat locales as opaque identifiers. This module only
helps users catch typos in configuration ("it_IT" vs "it-IT", "en-UK")
by asking Babel whether each identifier names a CLDR locale. It never
changes pipeline behavior.

Babel is an optional dependency: ``pip install speakinline[babel]``.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterable

__all__ = [
    "BabelImportError",
    "check_locales",
    "is_babel_available",
    "require_babel",
]

logger = logging.getLogger(__name__)


class BabelImportError(ImportError):
    """Raised when a feature needs Babel and it is not installed."""

    def __init__(self, feature: str) -> None:
        """Create error with feature-specific message.

        Args:
            feature: Name of the feature/function requiring Babel
        """
        message = (
            f"{feature} requires Babel for CLDR locale data. "
            "Install with: pip install speakinline[babel]"
        )
        super().__init__(message)
        self.feature = feature


@functools.cache
def is_babel_available() -> bool:
    """Check if Babel is installed (result cached)."""
    try:
        import babel  # noqa: F401, PLC0415
    except ImportError:
        return False
    return True


def require_babel(feature: str) -> None:
    """Assert that Babel is available.

    Raises:
        BabelImportError: If Babel is not installed
    """
    if not is_babel_available():
        raise BabelImportError(feature)


def check_locales(locales: Iterable[str]) -> list[str]:
    """Return the identifiers Babel does not recognize, logging each one.

    Both BCP-47 ("en-US") and POSIX ("en_US") separators are accepted.

    Raises:
        BabelImportError: If Babel is not installed

    Example:
        >>> check_locales(["en-US", "it-IT", "xx-YY"])  # doctest: +SKIP
        ['xx-YY']
    """
    require_babel("check_locales")
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel.core import Locale, UnknownLocaleError  # noqa: PLC0415

    unknown = []
    for locale in locales:
        try:
            Locale.parse(locale.replace("-", "_"))
        except (UnknownLocaleError, ValueError) as e:
            logger.warning("Unknown locale '%s': %s", locale, e)
            unknown.append(locale)
    return unknown
