"""Asset format registry.

Maps a format name (which is also the asset file extension) to the
strategy that parses and serializes translation trees. Adding a format
means registering one object; pipeline control flow does not change.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
import threading
from typing import Protocol

from speakinline.diagnostics import AssetFormatError, ConfigError
from speakinline.translation.tree import Tree, deep_merge

__all__ = [
    "AssetFormat",
    "JsonFormat",
    "get_format",
    "register_format",
    "registered_formats",
]


class AssetFormat(Protocol):
    """Protocol for translation asset formats.

    This is a Protocol (structural typing) rather than ABC, so any object
    with the two methods can be registered.

    Example:
        >>> class UpperJson:
        ...     def parse(self, existing, raw, path=""):
        ...         return deep_merge(existing, json.loads(raw.upper()))
        ...     def serialize(self, tree):
        ...         return json.dumps(tree)
        >>> register_format("ujson", UpperJson())
    """

    def parse(self, existing: Tree, raw: str, path: str = "") -> Tree:
        """Parse raw asset text and merge it over existing.

        Args:
            existing: Tree accumulated from previously parsed assets
            raw: Asset file contents
            path: Asset path, for error messages

        Returns:
            The merged tree

        Raises:
            AssetFormatError: If raw is not a valid asset of this format
        """

    def serialize(self, tree: Tree) -> str:
        """Serialize a tree to asset text."""


class JsonFormat:
    """UTF-8 JSON object with string leaves, indented by two spaces."""

    def parse(self, existing: Tree, raw: str, path: str = "") -> Tree:
        """Parse a JSON object and deep-merge it over existing."""
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            msg = f"Invalid JSON in asset '{path}': {e}"
            raise AssetFormatError(msg, path=path) from e
        if not isinstance(data, dict):
            msg = f"Asset '{path}' must contain a JSON object, got {type(data).__name__}"
            raise AssetFormatError(msg, path=path)
        return deep_merge(existing, data)

    def serialize(self, tree: Tree) -> str:
        """Serialize with stable two-space indentation and a final newline."""
        return json.dumps(tree, indent=2, ensure_ascii=False) + "\n"


_registry: dict[str, AssetFormat] = {"json": JsonFormat()}
_registry_lock = threading.Lock()


def register_format(name: str, asset_format: AssetFormat) -> None:
    """Register (or replace) the strategy for a format name.

    Args:
        name: Format name, used as the file extension without the dot
        asset_format: Object implementing AssetFormat

    Raises:
        ConfigError: If name is empty or contains a dot or path separator
    """
    if not name or any(char in name for char in "./\\"):
        msg = f"Invalid format name: {name!r}"
        raise ConfigError(msg)
    with _registry_lock:
        _registry[name] = asset_format


def get_format(name: str) -> AssetFormat:
    """Return the strategy registered for name.

    Raises:
        ConfigError: If no format is registered under name
    """
    with _registry_lock:
        asset_format = _registry.get(name)
    if asset_format is None:
        msg = f"Unsupported asset format '{name}'. Registered: {', '.join(registered_formats())}"
        raise ConfigError(msg)
    return asset_format


def registered_formats() -> tuple[str, ...]:
    """Return registered format names in sorted order."""
    with _registry_lock:
        return tuple(sorted(_registry))
