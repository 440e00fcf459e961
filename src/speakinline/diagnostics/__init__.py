"""Diagnostic system for speakinline pipelines.

Provides immutable diagnostic records for non-fatal conditions, the
per-run report that accumulates them, and the exception hierarchy for
fatal ones.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic
from .errors import AssetFormatError, AssetLoadError, ConfigError, SpeakError
from .report import RunReport

__all__ = [
    "AssetFormatError",
    "AssetLoadError",
    "ConfigError",
    "Diagnostic",
    "RunReport",
    "SpeakError",
]
