"""Command line entry point.

Usage:
    speakinline extract --supported-langs en-US,it-IT [--assets-path public/i18n]
    speakinline inline --supported-langs it-IT,en-US --default-lang en-US --dist-path dist

Exit codes:
    0 - success
    1 - pipeline error (invalid options, unreadable or corrupt assets)
    2 - invalid command line (argparse)

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from speakinline.config import ExtractOptions, InlineOptions
from speakinline.constants import (
    BUNDLE_EXTENSIONS,
    DEFAULT_ASSETS_PATH,
    DEFAULT_BASE_PATH,
    DEFAULT_FORMAT,
    DEFAULT_KEY_SEPARATOR,
    DEFAULT_KEY_VALUE_SEPARATOR,
    DEFAULT_SOURCE_FILES_PATH,
    GLOBAL_LANG,
    TRANSLATE_FN,
)
from speakinline.diagnostics import RunReport, SpeakError
from speakinline.extract import extract
from speakinline.inline import InlinePlugin
from speakinline.locale_utils import check_locales

__all__ = ["build_parser", "main"]

logger = logging.getLogger(__name__)


def _langs(value: str) -> list[str]:
    langs = [lang.strip() for lang in value.split(",") if lang.strip()]
    if not langs:
        msg = "expected a comma-separated list of locales"
        raise argparse.ArgumentTypeError(msg)
    return langs


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--supported-langs", type=_langs, required=True, help="Comma-separated locales"
    )
    parser.add_argument("--base-path", default=DEFAULT_BASE_PATH, help="Project root")
    parser.add_argument(
        "--assets-path", default=DEFAULT_ASSETS_PATH, help="Assets directory (relative to base path)"
    )
    parser.add_argument("--key-separator", default=DEFAULT_KEY_SEPARATOR)
    parser.add_argument("--key-value-separator", default=DEFAULT_KEY_VALUE_SEPARATOR)
    parser.add_argument(
        "--translate-fn", default=TRANSLATE_FN, help="Exported name of the translation function"
    )
    parser.add_argument(
        "--check-locales",
        action="store_true",
        help="Warn about locales Babel does not recognize (requires speakinline[babel])",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log every diagnostic")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Log warnings only")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with extract and inline subcommands."""
    parser = argparse.ArgumentParser(
        prog="speakinline", description="Extract and inline translation keys"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    extract_parser = commands.add_parser("extract", help="Extract keys from sources into assets")
    _add_common(extract_parser)
    extract_parser.add_argument("--default-lang", default=None)
    extract_parser.add_argument(
        "--source-files-path",
        default=DEFAULT_SOURCE_FILES_PATH,
        help="Sources directory (relative to base path)",
    )
    extract_parser.add_argument("--format", default=DEFAULT_FORMAT, help="Asset format")

    inline_parser = commands.add_parser("inline", help="Inline translations into bundle files")
    _add_common(inline_parser)
    inline_parser.add_argument("--default-lang", required=True)
    inline_parser.add_argument(
        "--dist-path", type=Path, required=True, help="Directory of emitted bundle chunks"
    )
    inline_parser.add_argument(
        "--global-lang", default=GLOBAL_LANG, help="Runtime variable holding the active locale"
    )
    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _run_extract(args: argparse.Namespace) -> RunReport:
    options = ExtractOptions(
        supported_langs=args.supported_langs,
        default_lang=args.default_lang,
        base_path=args.base_path,
        source_files_path=args.source_files_path,
        assets_path=args.assets_path,
        format=args.format,
        key_separator=args.key_separator,
        key_value_separator=args.key_value_separator,
        translate_fn=args.translate_fn,
    )
    return extract(options).report


def _bundle_files(dist_path: Path) -> list[Path]:
    if not dist_path.is_dir():
        msg = f"Bundle directory not found: '{dist_path}'"
        raise SpeakError(msg)
    return sorted(
        path for path in dist_path.rglob("*") if path.suffix in BUNDLE_EXTENSIONS and path.is_file()
    )


def _run_inline(args: argparse.Namespace) -> RunReport:
    options = InlineOptions(
        supported_langs=args.supported_langs,
        default_lang=args.default_lang,
        base_path=args.base_path,
        assets_path=args.assets_path,
        key_separator=args.key_separator,
        key_value_separator=args.key_value_separator,
        translate_fn=args.translate_fn,
        global_lang=args.global_lang,
    )
    plugin = InlinePlugin(options)
    plugin.build_start()
    for path in _bundle_files(args.dist_path):
        code = path.read_text(encoding="utf-8")
        transformed = plugin.render_chunk(code, path.relative_to(args.dist_path).as_posix())
        if transformed is not None:
            path.write_text(transformed, encoding="utf-8")
            logger.debug("Rewrote %s", path)
    return plugin.close_bundle()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return the exit code."""
    args = build_parser().parse_args(argv)
    _configure_logging(args)

    try:
        if args.check_locales:
            check_locales(args.supported_langs)
        if args.command == "extract":
            report = _run_extract(args)
            report.log_summary()
        else:
            report = _run_inline(args)
    except (SpeakError, OSError, UnicodeDecodeError, ImportError) as e:
        logger.error("%s", e)
        return 1

    if args.verbose:
        report.log_diagnostics(logging.INFO)
    return 0


if __name__ == "__main__":
    sys.exit(main())
