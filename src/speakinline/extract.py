"""Extraction pipeline.

Collects every statically resolvable key from the application sources
and writes one translation tree per supported locale:

    scan sources -> seed keys -> load existing assets -> merge -> sort -> write

Each locale tree is seeded with the same keys and the inline default
found in code (empty string if none). Existing assets are merged over the
seeded tree, so translations already on disk survive repeated runs.

Failure policy:
    Extraction is advisory tooling. A source file that cannot be read or
    decoded is skipped and recorded as a READ_FAILURE diagnostic. Existing
    assets are different: an unreadable or unparsable asset raises, since
    writing would replace it and lose its translations. A top-level key that
    is not a safe file name is not written and is recorded as an
    UNSAFE_PARTITION diagnostic.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from speakinline.config import ExtractOptions
from speakinline.constants import SOURCE_EXTENSIONS
from speakinline.diagnostics import ConfigError, Diagnostic, RunReport
from speakinline.enums import IssueKind
from speakinline.resolver import DynamicCall, resolve_call
from speakinline.syntax.scanner import find_translate_alias, scan_calls
from speakinline.translation.formats import get_format
from speakinline.translation.loading import PathAssetLoader, load_translations
from speakinline.translation.store import TranslationStore
from speakinline.translation.tree import Tree

__all__ = [
    "ExtractedKey",
    "ExtractionResult",
    "extract",
    "find_source_files",
    "scan_source",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExtractedKey:
    """A key found in source, with the inline default if the call gave one.

    Attributes:
        key: Dotted key
        default_value: Inline default, or None
        path: Source file the call is in
        line: 1-indexed line of the call
    """

    key: str
    default_value: str | None
    path: str
    line: int


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Outcome of one extraction run.

    Attributes:
        translations: Written tree per locale
        written: Asset files written, in write order
        report: Counters and diagnostics of the run
    """

    translations: dict[str, Tree]
    written: tuple[Path, ...]
    report: RunReport = field(default_factory=RunReport)


def find_source_files(directory: Path) -> list[Path]:
    """Recursively list files with a source extension, in sorted order.

    Raises:
        ConfigError: If directory does not exist or is not a directory
    """
    if not directory.is_dir():
        msg = f"Source directory not found: '{directory}'"
        raise ConfigError(msg)
    return sorted(
        path for path in directory.rglob("*") if path.suffix in SOURCE_EXTENSIONS and path.is_file()
    )


def scan_source(
    text: str, path: str, options: ExtractOptions
) -> tuple[list[ExtractedKey], list[Diagnostic]]:
    """Extract keys from one source text.

    Texts that do not mention the translation function at all are skipped
    without scanning.

    Returns:
        (keys of static calls, DYNAMIC diagnostics of skipped calls)
    """
    keys: list[ExtractedKey] = []
    diagnostics: list[Diagnostic] = []
    if options.translate_fn not in text:
        return keys, diagnostics

    alias = find_translate_alias(text, options.translate_fn)
    for call in scan_calls(text, alias):
        resolution = resolve_call(
            call,
            options.supported_langs,
            key_separator=options.key_separator,
            key_value_separator=options.key_value_separator,
        )
        if isinstance(resolution, DynamicCall):
            diagnostics.append(
                Diagnostic(
                    kind=IssueKind.DYNAMIC,
                    message=f"skipped {call.text!r}: {resolution.reason}",
                    path=path,
                    line=call.line,
                )
            )
            continue
        keys.append(ExtractedKey(resolution.key, resolution.default_value, path, call.line))
    return keys, diagnostics


def _read_and_scan(
    path: Path, options: ExtractOptions
) -> tuple[list[ExtractedKey], list[Diagnostic]]:
    text = path.read_text(encoding="utf-8")
    return scan_source(text, str(path), options)


def extract(options: ExtractOptions, *, max_workers: int | None = None) -> ExtractionResult:
    """Run the extraction pipeline and write the assets.

    Args:
        options: Validated extraction options
        max_workers: Thread pool size for reading sources and assets

    Returns:
        ExtractionResult with the written trees, paths and run report

    Raises:
        ConfigError: If the sources directory does not exist
        AssetLoadError: If an existing asset cannot be read
        AssetFormatError: If an existing asset cannot be parsed
        OSError: If an asset cannot be written
    """
    report = RunReport()
    files = find_source_files(options.sources_dir)
    logger.debug("Scanning %d source file(s) under %s", len(files), options.sources_dir)

    keys: list[ExtractedKey] = []
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [(path, pool.submit(_read_and_scan, path, options)) for path in files]
        for path, future in futures:
            try:
                file_keys, diagnostics = future.result()
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Skipping unreadable source file %s: %s", path, e)
                report.add(Diagnostic(IssueKind.READ_FAILURE, str(e), path=str(path)))
                continue
            report.files += 1
            keys.extend(file_keys)
            for diagnostic in diagnostics:
                report.add(diagnostic)

    store = TranslationStore(
        options.supported_langs,
        key_separator=options.key_separator,
        on_conflict=lambda locale, key: report.add(
            Diagnostic(IssueKind.SHAPE_CONFLICT, "replaced value of a different shape", locale, key)
        ),
    )
    for extracted in keys:
        store.seed(extracted.key, extracted.default_value or "")
    report.keys = len(keys)

    loader = PathAssetLoader(options.base_path, options.assets_path)
    existing = load_translations(
        loader, options.supported_langs, missing_ok=True, max_workers=max_workers
    )
    for lang, tree in existing.items():
        store.merge(lang, tree)
    store.sort()

    asset_format = get_format(options.format)
    written: list[Path] = []
    for lang in options.supported_langs:
        loader.locale_dir(lang).mkdir(parents=True, exist_ok=True)
        for name, tree in store.partitions(lang):
            try:
                path = loader.asset_path(lang, name, options.format)
            except ValueError as e:
                logger.warning("Skipping partition '%s' of %s: %s", name, lang, e)
                report.add(Diagnostic(IssueKind.UNSAFE_PARTITION, str(e), lang, name))
                continue
            path.write_text(asset_format.serialize(tree), encoding="utf-8")
            logger.info("%s", path)
            written.append(path)

    return ExtractionResult(translations=store.to_dict(), written=tuple(written), report=report)
