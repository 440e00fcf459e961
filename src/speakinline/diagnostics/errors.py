"""speakinline exception hierarchy.

Only conditions that must stop a pipeline raise. Everything else is
recorded as a Diagnostic in the run report.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "AssetFormatError",
    "AssetLoadError",
    "ConfigError",
    "SpeakError",
]


class SpeakError(Exception):
    """Base exception for all speakinline errors."""


class ConfigError(SpeakError, ValueError):
    """Invalid pipeline options.

    Examples:
    - Empty supported locale list
    - Default locale not among the supported locales
    - Empty or identical separators
    - Unregistered asset format
    """


class AssetFormatError(SpeakError):
    """Existing asset text that cannot be parsed into a translation tree.

    Raised instead of skipping the file, since the extraction pipeline
    would otherwise overwrite the asset and lose its translations.

    Attributes:
        path: Asset file that failed to parse (empty if unknown)
    """

    def __init__(self, message: str, *, path: str = "") -> None:
        """Initialize AssetFormatError.

        Args:
            message: Error message string
            path: Asset file that failed to parse
        """
        super().__init__(message)
        self.path = path


class AssetLoadError(SpeakError):
    """Asset directory or file that cannot be read while inlining.

    Inlining affects the built output, so a missing translation dataset
    fails the build instead of silently emitting runtime calls.

    Attributes:
        locale: Locale whose assets failed to load
        path: Directory or file that could not be read
    """

    def __init__(self, message: str, *, locale: str = "", path: str = "") -> None:
        """Initialize AssetLoadError.

        Args:
            message: Error message string
            locale: Locale whose assets failed to load
            path: Directory or file that could not be read
        """
        super().__init__(message)
        self.locale = locale
        self.path = path
