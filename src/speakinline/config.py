"""Pipeline options.

Frozen dataclasses validated at construction, so a pipeline never starts
with options that would fail halfway through a run.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from speakinline.constants import (
    DEFAULT_ASSETS_PATH,
    DEFAULT_BASE_PATH,
    DEFAULT_FORMAT,
    DEFAULT_KEY_SEPARATOR,
    DEFAULT_KEY_VALUE_SEPARATOR,
    DEFAULT_SOURCE_FILES_PATH,
    GLOBAL_LANG,
    TRANSLATE_FN,
)
from speakinline.diagnostics import ConfigError
from speakinline.translation.formats import get_format

__all__ = ["ExtractOptions", "InlineOptions"]

_JS_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")


def _validate_langs(supported_langs: Sequence[str], default_lang: str | None) -> None:
    if isinstance(supported_langs, str):
        msg = "supported_langs must be a sequence of locales, not a string"
        raise ConfigError(msg)
    if not supported_langs:
        msg = "supported_langs must contain at least one locale"
        raise ConfigError(msg)
    if any(not lang for lang in supported_langs):
        msg = "supported_langs must not contain empty locales"
        raise ConfigError(msg)
    if len(set(supported_langs)) != len(supported_langs):
        msg = f"supported_langs contains duplicates: {list(supported_langs)}"
        raise ConfigError(msg)
    if default_lang is not None and default_lang not in supported_langs:
        msg = f"default_lang '{default_lang}' is not in supported_langs {list(supported_langs)}"
        raise ConfigError(msg)


def _validate_separators(key_separator: str, key_value_separator: str) -> None:
    if not key_separator or not key_value_separator:
        msg = "key_separator and key_value_separator must not be empty"
        raise ConfigError(msg)
    if key_separator == key_value_separator:
        msg = f"key_separator and key_value_separator must differ, both are '{key_separator}'"
        raise ConfigError(msg)


def _validate_identifier(option: str, value: str) -> None:
    if not _JS_IDENTIFIER.fullmatch(value):
        msg = f"{option} must be a JavaScript identifier, got '{value}'"
        raise ConfigError(msg)


@dataclass(frozen=True, slots=True)
class ExtractOptions:
    """Options of the extraction pipeline.

    Example:
        >>> options = ExtractOptions(supported_langs=["en-US", "it-IT"])
        >>> options.sources_dir
        PosixPath('src')
        >>> options.default_lang
        'en-US'

    Attributes:
        supported_langs: Locales to extract into (one tree each)
        default_lang: Locale used as fallback (defaults to the first
            supported locale)
        base_path: Project root
        source_files_path: Sources directory relative to base_path
        assets_path: Assets directory relative to base_path
        format: Asset format name (must be registered)
        key_separator: Separator of dotted key segments
        key_value_separator: Separator between key and inline default
        translate_fn: Canonical name of the translation function
    """

    supported_langs: tuple[str, ...]
    default_lang: str | None = None
    base_path: str = DEFAULT_BASE_PATH
    source_files_path: str = DEFAULT_SOURCE_FILES_PATH
    assets_path: str = DEFAULT_ASSETS_PATH
    format: str = DEFAULT_FORMAT
    key_separator: str = DEFAULT_KEY_SEPARATOR
    key_value_separator: str = DEFAULT_KEY_VALUE_SEPARATOR
    translate_fn: str = TRANSLATE_FN

    def __post_init__(self) -> None:
        """Normalize supported_langs to a tuple and validate all options.

        Raises:
            ConfigError: If any option is invalid
        """
        _validate_langs(self.supported_langs, self.default_lang)
        object.__setattr__(self, "supported_langs", tuple(self.supported_langs))
        if self.default_lang is None:
            object.__setattr__(self, "default_lang", self.supported_langs[0])
        _validate_separators(self.key_separator, self.key_value_separator)
        _validate_identifier("translate_fn", self.translate_fn)
        get_format(self.format)

    @property
    def sources_dir(self) -> Path:
        """Directory scanned for source files."""
        return Path(self.base_path) / self.source_files_path


@dataclass(frozen=True, slots=True)
class InlineOptions:
    """Options of the inlining pipeline.

    Attributes:
        supported_langs: Locales encoded in every fallback chain, in chain
            order
        default_lang: Locale whose value ends every chain
        base_path: Project root
        assets_path: Assets directory relative to base_path
        key_separator: Separator of dotted key segments
        key_value_separator: Separator between key and inline default
        translate_fn: Canonical name of the translation function
        global_lang: Runtime variable holding the active locale
    """

    supported_langs: tuple[str, ...]
    default_lang: str
    base_path: str = DEFAULT_BASE_PATH
    assets_path: str = DEFAULT_ASSETS_PATH
    key_separator: str = DEFAULT_KEY_SEPARATOR
    key_value_separator: str = DEFAULT_KEY_VALUE_SEPARATOR
    translate_fn: str = TRANSLATE_FN
    global_lang: str = GLOBAL_LANG

    def __post_init__(self) -> None:
        """Normalize supported_langs to a tuple and validate all options.

        Raises:
            ConfigError: If any option is invalid
        """
        _validate_langs(self.supported_langs, self.default_lang)
        object.__setattr__(self, "supported_langs", tuple(self.supported_langs))
        _validate_separators(self.key_separator, self.key_value_separator)
        _validate_identifier("translate_fn", self.translate_fn)
        _validate_identifier("global_lang", self.global_lang)
