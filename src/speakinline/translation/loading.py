"""Translation asset loading.

Asset layout on disk:
    <base_path>/<assets_path>/<locale>/<partition>.<format>

Every locale directory is read in one concurrent batch: all file reads
of all locales are submitted together, and parsing into trees starts
only after the reads have been issued. Parsing and merging run on the
calling thread, so no tree is mutated concurrently.

Components:
    PathAssetLoader - Disk layout with path-traversal prevention
    load_translations - Concurrent fan-out/fan-in load of several locales

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from speakinline.diagnostics import AssetLoadError
from speakinline.translation.formats import get_format, registered_formats
from speakinline.translation.tree import Tree

__all__ = [
    "PathAssetLoader",
    "load_translations",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PathAssetLoader:
    """File system layout of translation assets.

    Security:
        Locale codes and asset names containing path separators, ".." or
        NUL are rejected, so no asset path can leave the assets root.

    Example:
        >>> loader = PathAssetLoader("./", "public/i18n")
        >>> loader.locale_dir("it-IT")
        PosixPath('public/i18n/it-IT')

    Attributes:
        base_path: Project root
        assets_path: Assets directory relative to base_path
    """

    base_path: str
    assets_path: str
    _root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache the assets root."""
        object.__setattr__(self, "_root", Path(self.base_path) / self.assets_path)

    @property
    def root(self) -> Path:
        """Directory holding one subdirectory per locale."""
        return self._root

    @staticmethod
    def _validate_component(value: str, what: str) -> None:
        """Validate one path component for path traversal attacks.

        Raises:
            ValueError: If value is empty or contains unsafe path components
        """
        if not value:
            msg = f"{what} cannot be empty"
            raise ValueError(msg)
        if ".." in value:
            msg = f"Path traversal sequences not allowed in {what.lower()}: '{value}'"
            raise ValueError(msg)
        if "/" in value or "\\" in value:
            msg = f"Path separators not allowed in {what.lower()}: '{value}'"
            raise ValueError(msg)
        if "\0" in value:
            msg = f"NUL character not allowed in {what.lower()}: {value!r}"
            raise ValueError(msg)

    def locale_dir(self, locale: str) -> Path:
        """Return the asset directory of locale.

        Raises:
            ValueError: If locale is not a safe directory name
        """
        self._validate_component(locale, "Locale code")
        return self._root / locale

    def asset_path(self, locale: str, name: str, asset_format: str) -> Path:
        """Return the path of one asset: <locale_dir>/<name>.<format>.

        Raises:
            ValueError: If locale or name is not a safe file name, so the
                path can never leave the locale directory
        """
        self._validate_component(name, "Asset name")
        return self.locale_dir(locale) / f"{name}.{asset_format}"

    def list_assets(self, locale: str, *, missing_ok: bool = False) -> list[Path]:
        """List asset files of locale in a registered format, sorted by name.

        Args:
            locale: Locale whose directory to list
            missing_ok: Return an empty list instead of raising when the
                locale directory does not exist

        Raises:
            AssetLoadError: If the directory cannot be listed
        """
        directory = self.locale_dir(locale)
        if missing_ok and not directory.exists():
            return []
        try:
            entries = sorted(directory.iterdir())
        except OSError as e:
            msg = f"Cannot read asset directory '{directory}': {e}"
            raise AssetLoadError(msg, locale=locale, path=str(directory)) from e
        formats = set(registered_formats())
        assets = []
        for entry in entries:
            if not entry.is_file():
                continue
            if entry.suffix[1:] not in formats:
                logger.debug("Skipping asset with unregistered format: %s", entry)
                continue
            assets.append(entry)
        return assets

    def read(self, locale: str, path: Path) -> str:
        """Read one asset as UTF-8 text.

        Raises:
            AssetLoadError: If the file cannot be read or decoded
        """
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Cannot read asset '{path}': {e}"
            raise AssetLoadError(msg, locale=locale, path=str(path)) from e


def load_translations(
    loader: PathAssetLoader,
    locales: list[str] | tuple[str, ...],
    *,
    missing_ok: bool = False,
    max_workers: int | None = None,
) -> dict[str, Tree]:
    """Load and merge the assets of every locale.

    Files of one locale are merged in name order, later files winning on
    conflicts.

    Args:
        loader: Asset layout
        locales: Locales to load
        missing_ok: Treat a missing locale directory as an empty tree
        max_workers: Thread pool size (None: executor default)

    Returns:
        Mapping of locale to its merged tree, in locales order

    Raises:
        AssetLoadError: If a locale directory or asset cannot be read
            (a missing directory too, unless missing_ok)
        AssetFormatError: If an asset cannot be parsed
    """
    listing = {locale: loader.list_assets(locale, missing_ok=missing_ok) for locale in locales}
    trees: dict[str, Tree] = {}
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        pending: dict[str, list[tuple[Path, Future[str]]]] = {
            locale: [(path, pool.submit(loader.read, locale, path)) for path in paths]
            for locale, paths in listing.items()
        }
        for locale, reads in pending.items():
            tree: Tree = {}
            for path, future in reads:
                raw = future.result()
                if not raw.strip():
                    continue
                tree = get_format(path.suffix[1:]).parse(tree, raw, str(path))
            logger.debug("Loaded %d asset(s) for locale %s", len(reads), locale)
            trees[locale] = tree
    return trees
