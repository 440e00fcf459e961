"""File system helpers shared by pipeline tests."""

from __future__ import annotations

import json
from pathlib import Path


def write_files(root: Path, files: dict[str, str]) -> None:
    """Create files (and parent directories) under root."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def read_json(path: Path) -> object:
    """Parse a UTF-8 JSON file."""
    return json.loads(path.read_text(encoding="utf-8"))
