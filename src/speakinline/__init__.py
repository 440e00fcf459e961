"""speakinline - build-time extraction and inlining of translation keys.

Extracts localization keys from JavaScript/TypeScript sources into
per-locale translation assets, and rewrites translation-function calls in
bundled output into inline fallback chains that select the value for the
active locale without a runtime lookup.

Public API:
    extract - Extraction pipeline (sources -> assets)
    inline - Inlining pipeline (bundled code -> bundled code)
    InlinePlugin - Build-step hooks around inline()
    ExtractOptions, InlineOptions - Validated pipeline options
    TranslationStore - One translation tree per locale
    transpile_params - Substitute {{ name }} placeholders with values

Exceptions:
    SpeakError - Base exception class
    ConfigError - Invalid options
    AssetFormatError - Unparsable translation asset
    AssetLoadError - Unreadable translation asset

Submodules:
    speakinline.syntax - Call-expression scanner
    speakinline.resolver - Static/dynamic call classification
    speakinline.translation - Trees, store, formats and asset loading
    speakinline.diagnostics - Diagnostics, run reports and exceptions
"""

from .config import ExtractOptions, InlineOptions
from .diagnostics import AssetFormatError, AssetLoadError, ConfigError, RunReport, SpeakError
from .extract import ExtractionResult, extract
from .inline import InlinePlugin, InlineResult, inline
from .interpolation import transpile_params
from .translation import TranslationStore

# Version information - Auto-populated from package metadata
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("speakinline")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AssetFormatError",
    "AssetLoadError",
    "ConfigError",
    "ExtractOptions",
    "ExtractionResult",
    "InlineOptions",
    "InlinePlugin",
    "InlineResult",
    "RunReport",
    "SpeakError",
    "TranslationStore",
    "__version__",
    "extract",
    "inline",
    "transpile_params",
]
