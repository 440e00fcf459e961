"""Shared constants for speakinline.

Provides the names the translation runtime exports, option defaults and
the file-extension allow-lists used by both pipelines. Placing constants
here avoids circular imports between the scanner, the resolver and the
pipelines.

Constants are grouped by domain:
- Runtime names: Identifiers emitted by or searched for in JavaScript code
- Option defaults: Values used when an option is not given
- File selection: Extension allow-lists for directory walks
- Depth limits: Recursion protection for tree operations

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Runtime names
    "TRANSLATE_FN",
    "GLOBAL_LANG",
    # Option defaults
    "DEFAULT_BASE_PATH",
    "DEFAULT_SOURCE_FILES_PATH",
    "DEFAULT_ASSETS_PATH",
    "DEFAULT_FORMAT",
    "DEFAULT_KEY_SEPARATOR",
    "DEFAULT_KEY_VALUE_SEPARATOR",
    "UNPARTITIONED_ASSET",
    # File selection
    "SOURCE_EXTENSIONS",
    "BUNDLE_EXTENSIONS",
    # Depth limits
    "MAX_DEPTH",
]

# ============================================================================
# RUNTIME NAMES
# ============================================================================

# Canonical name under which the runtime library exports the translation
# function. Source files usually import it under a shorter alias.
TRANSLATE_FN: str = "$translate"

# Global variable holding the active locale in the generated fallback chain:
# $lang === 'it-IT' && `Ciao` || `Hello`
GLOBAL_LANG: str = "$lang"

# ============================================================================
# OPTION DEFAULTS
# ============================================================================

DEFAULT_BASE_PATH: str = "./"
DEFAULT_SOURCE_FILES_PATH: str = "src"
DEFAULT_ASSETS_PATH: str = "public/i18n"
DEFAULT_FORMAT: str = "json"
DEFAULT_KEY_SEPARATOR: str = "."
DEFAULT_KEY_VALUE_SEPARATOR: str = "@@"

# Asset name used when a translation tree is written as a single file.
UNPARTITIONED_ASSET: str = "app"

# ============================================================================
# FILE SELECTION
# ============================================================================

# Application sources scanned by the extraction pipeline.
SOURCE_EXTENSIONS: frozenset[str] = frozenset({".js", ".ts", ".jsx", ".tsx"})

# Emitted bundle chunks rewritten by the command line inliner.
BUNDLE_EXTENSIONS: frozenset[str] = frozenset({".js", ".mjs", ".cjs"})

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting of translation trees and of delimiters inside a scanned
# call. Deeper input is treated as malformed rather than risking RecursionError.
MAX_DEPTH: int = 100
