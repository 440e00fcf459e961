"""Inlining pipeline.

Replaces translation-function calls in bundled output with a fallback
chain that selects the value for the active locale without a runtime
lookup:

    $translate('app.title')
    -> $lang === 'it-IT' && `Benvenuto` || `Welcome`

Only static calls are replaced. Dynamic calls, and calls whose value is
missing in the default locale, are left verbatim and stay runtime calls.
Text outside replaced calls is never modified.

Failure policy:
    Inlining changes the build output, so the translation dataset must
    load completely: InlinePlugin.build_start() propagates every asset
    error. Per-call problems (dynamic arguments, missing values) are
    recorded as diagnostics and never fail the chunk.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from speakinline.config import InlineOptions
from speakinline.constants import GLOBAL_LANG
from speakinline.diagnostics import Diagnostic, RunReport
from speakinline.enums import IssueKind
from speakinline.interpolation import (
    escape_template,
    interpolate_placeholders,
    quote_locale,
    quote_value,
)
from speakinline.resolver import DynamicCall, StaticCall, resolve_call
from speakinline.syntax.scanner import find_translate_alias, scan_calls
from speakinline.translation.loading import PathAssetLoader, load_translations
from speakinline.translation.store import TranslationStore
from speakinline.translation.tree import Tree

__all__ = [
    "InlinePlugin",
    "InlineResult",
    "build_line",
    "inline",
    "resolve_value",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InlineResult:
    """Outcome of inlining one code block.

    Attributes:
        code: Transformed code, or None if nothing was replaced
        report: Counters and diagnostics of this block
    """

    code: str | None
    report: RunReport = field(default_factory=RunReport)

    @property
    def changed(self) -> bool:
        """True if at least one call was replaced."""
        return self.code is not None


def resolve_value(
    store: TranslationStore,
    lang: str,
    key: str,
    params: Sequence[tuple[str, str]] | None = None,
) -> str | None:
    """Return the quoted, interpolated value of key in lang.

    Returns:
        A template literal such as ```Hello ${name}```, or None if the
        locale has no leaf at key
    """
    value = store.get(lang, key)
    if value is None:
        return None
    escaped = escape_template(value)
    if params:
        escaped = interpolate_placeholders(escaped, params)
    return quote_value(escaped)


def build_line(
    values: Mapping[str, str],
    supported_langs: Sequence[str],
    default_lang: str,
    global_lang: str = GLOBAL_LANG,
) -> str:
    """Assemble the short-circuit fallback chain.

    Locales without a value are left out; at runtime they fall through to
    the default locale's value, which ends the chain.

    Args:
        values: Quoted value per locale (must contain default_lang)
        supported_langs: Active locales in chain order
        default_lang: Locale whose value terminates the chain
        global_lang: Runtime variable holding the active locale

    Example:
        >>> build_line({"it-IT": "`Ciao`", "en-US": "`Hello`"}, ["it-IT", "en-US"], "en-US", "lang")
        "lang === 'it-IT' && `Ciao` || `Hello`"
    """
    line = ""
    for lang in supported_langs:
        if lang == default_lang or lang not in values:
            continue
        line += f"{global_lang} === {quote_locale(lang)} && {values[lang]} || "
    return line + values[default_lang]


def _inline_call(
    resolution: StaticCall,
    store: TranslationStore,
    options: InlineOptions,
    report: RunReport,
) -> str | None:
    if resolution.lang is None:
        supported_langs: Sequence[str] = options.supported_langs
        default_lang = options.default_lang
    else:
        supported_langs = (resolution.lang,)
        default_lang = resolution.lang

    key = resolution.key
    default_value = resolve_value(store, default_lang, key, resolution.params)
    if default_value is None:
        logger.warning("%s - missing value for key: %s - Skip", default_lang, key)
        report.add(Diagnostic(IssueKind.MISSING_VALUE, "missing value, call kept", default_lang, key))
        return None

    values = {default_lang: default_value}
    for lang in supported_langs:
        if lang == default_lang:
            continue
        value = resolve_value(store, lang, key, resolution.params)
        if value is None:
            logger.warning("%s - missing value for key: %s", lang, key)
            report.add(Diagnostic(IssueKind.MISSING_VALUE, "missing value, falls back", lang, key))
            continue
        values[lang] = value

    return build_line(values, supported_langs, default_lang, options.global_lang)


def inline(
    code: str,
    translation: TranslationStore | Mapping[str, Tree],
    options: InlineOptions,
    *,
    file_name: str | None = None,
) -> InlineResult:
    """Replace every resolvable translation call in code.

    Args:
        code: Bundled code block
        translation: Loaded dataset (a store, or trees keyed by locale)
        options: Validated inlining options
        file_name: Chunk name recorded in diagnostics

    Returns:
        InlineResult whose code is None when the block needs no change
    """
    report = RunReport(files=1)
    if options.translate_fn not in code:
        return InlineResult(None, report)

    store = (
        translation
        if isinstance(translation, TranslationStore)
        else TranslationStore(
            options.supported_langs, key_separator=options.key_separator, trees=translation
        )
    )
    alias = find_translate_alias(code, options.translate_fn)

    pieces: list[str] = []
    last = 0
    for call in scan_calls(code, alias):
        resolution = resolve_call(
            call,
            options.supported_langs,
            key_separator=options.key_separator,
            key_value_separator=options.key_value_separator,
        )
        if isinstance(resolution, DynamicCall):
            report.add(
                Diagnostic(
                    kind=IssueKind.DYNAMIC,
                    message=f"kept {call.text!r}: {resolution.reason}",
                    path=file_name,
                    line=call.line,
                )
            )
            continue
        line = _inline_call(resolution, store, options, report)
        if line is None:
            continue
        pieces.append(code[last : call.start])
        pieces.append(line)
        last = call.end
        report.inlined += 1

    if not pieces:
        return InlineResult(None, report)
    pieces.append(code[last:])
    return InlineResult("".join(pieces), report)


class InlinePlugin:
    """Build-step hooks around the inlining pipeline.

    A bundler host calls build_start() once, render_chunk() for every
    emitted chunk, and close_bundle() once at the end.

    Example:
        >>> plugin = InlinePlugin(InlineOptions(["it-IT", "en-US"], "en-US"))
        >>> plugin.build_start()  # doctest: +SKIP
        >>> plugin.render_chunk(code, "entry.js")  # doctest: +SKIP
    """

    name = "speakinline"

    def __init__(self, options: InlineOptions) -> None:
        """Create the plugin; no assets are read until build_start()."""
        self.options = options
        self.report = RunReport()
        self._store: TranslationStore | None = None

    @property
    def store(self) -> TranslationStore | None:
        """Dataset loaded by build_start(), or None before it ran."""
        return self._store

    def build_start(self, *, max_workers: int | None = None) -> None:
        """Load every supported locale.

        Raises:
            AssetLoadError: If a locale directory or asset cannot be read
            AssetFormatError: If an asset cannot be parsed
        """
        options = self.options
        loader = PathAssetLoader(options.base_path, options.assets_path)
        trees = load_translations(loader, options.supported_langs, max_workers=max_workers)
        self._store = TranslationStore(
            options.supported_langs, key_separator=options.key_separator, trees=trees
        )
        self.report = RunReport()
        logger.debug("Loaded translations for %s", ", ".join(options.supported_langs))

    def render_chunk(self, code: str, file_name: str) -> str | None:
        """Inline one chunk; None means the chunk is unchanged.

        Raises:
            RuntimeError: If build_start() has not run
        """
        if self._store is None:
            msg = "build_start() must run before render_chunk()"
            raise RuntimeError(msg)
        if file_name.startswith("entry"):
            logger.info("%s", file_name)
        result = inline(code, self._store, self.options, file_name=file_name)
        self.report.extend(result.report)
        return result.code

    def close_bundle(self) -> RunReport:
        """Log the run summary and return the accumulated report."""
        logger.info("speakinline inline: build ends at %s", datetime.now().isoformat(timespec="seconds"))
        self.report.log_summary()
        return self.report
