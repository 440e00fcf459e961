"""Source scanning for translation-function calls.

Python 3.13+. Zero external dependencies.
"""

from .cursor import Cursor
from .scanner import (
    ScannedCall,
    classify_argument,
    decode_escapes,
    find_translate_alias,
    scan_calls,
    split_arguments,
    string_value,
)

__all__ = [
    "Cursor",
    "ScannedCall",
    "classify_argument",
    "decode_escapes",
    "find_translate_alias",
    "scan_calls",
    "split_arguments",
    "string_value",
]
