"""Tests for the asset format registry and asset loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from speakinline.diagnostics import AssetFormatError, AssetLoadError, ConfigError
from speakinline.translation import (
    JsonFormat,
    PathAssetLoader,
    get_format,
    load_translations,
    register_format,
    registered_formats,
)
from speakinline.translation.tree import Tree, deep_merge
from tests.helpers.files import write_files


class KeyValueFormat:
    """Minimal 'key=value' format used to exercise the registry."""

    def parse(self, existing: Tree, raw: str, path: str = "") -> Tree:
        data: Tree = {}
        for line in raw.splitlines():
            key, _, value = line.partition("=")
            data[key.strip()] = value.strip()
        return deep_merge(existing, data)

    def serialize(self, tree: Tree) -> str:
        return "".join(f"{key}={value}\n" for key, value in tree.items())


class TestJsonFormat:
    """Built-in JSON strategy."""

    def test_parse_merges_over_existing(self) -> None:
        """Parsed objects are deep-merged over the existing tree."""
        tree = JsonFormat().parse({"a": {"x": "1"}}, '{"a": {"y": "2"}}')
        assert tree == {"a": {"x": "1", "y": "2"}}

    def test_serialize_is_stable(self) -> None:
        """Two-space indentation, UTF-8 characters kept, final newline."""
        text = JsonFormat().serialize({"a": "è"})
        assert text == '{\n  "a": "è"\n}\n'

    def test_invalid_json(self) -> None:
        """Malformed JSON raises AssetFormatError with the path."""
        with pytest.raises(AssetFormatError, match="Invalid JSON") as info:
            JsonFormat().parse({}, "{oops", "it-IT/app.json")
        assert info.value.path == "it-IT/app.json"

    def test_non_object(self) -> None:
        """A JSON array is not a translation tree."""
        with pytest.raises(AssetFormatError, match="must contain a JSON object"):
            JsonFormat().parse({}, "[1, 2]")


class TestRegistry:
    """Format lookup by name."""

    def test_json_registered(self) -> None:
        """JSON is built in."""
        assert isinstance(get_format("json"), JsonFormat)
        assert "json" in registered_formats()

    def test_unknown_format(self) -> None:
        """Unregistered names raise ConfigError."""
        with pytest.raises(ConfigError, match="Unsupported asset format 'yaml'"):
            get_format("yaml")

    def test_invalid_name(self) -> None:
        """Names with dots or separators are rejected."""
        with pytest.raises(ConfigError):
            register_format(".json", JsonFormat())

    def test_register_and_load_custom_format(self, tmp_path: Path) -> None:
        """A registered format is picked up by extension when loading."""
        register_format("kv", KeyValueFormat())
        write_files(tmp_path, {"i18n/en-US/app.kv": "title = Hello\n"})
        trees = load_translations(PathAssetLoader(str(tmp_path), "i18n"), ["en-US"])
        assert trees == {"en-US": {"title": "Hello"}}


class TestPathAssetLoader:
    """Disk layout and locale validation."""

    def test_asset_path(self, tmp_path: Path) -> None:
        """Assets live at <base>/<assets>/<locale>/<name>.<format>."""
        loader = PathAssetLoader(str(tmp_path), "public/i18n")
        assert loader.asset_path("it-IT", "app", "json") == tmp_path / "public/i18n/it-IT/app.json"

    @pytest.mark.parametrize("locale", ["", "..", "../etc", "a/b", "a\\b"])
    def test_unsafe_locale_rejected(self, tmp_path: Path, locale: str) -> None:
        """Locales cannot escape the assets root."""
        with pytest.raises(ValueError):
            PathAssetLoader(str(tmp_path), "i18n").locale_dir(locale)

    @pytest.mark.parametrize("name", ["", "..", "a/b", "/tmp/x", "a\\b", "a\0b"])
    def test_unsafe_asset_name_rejected(self, tmp_path: Path, name: str) -> None:
        """Asset names cannot leave the locale directory."""
        with pytest.raises(ValueError, match="asset name|Asset name"):
            PathAssetLoader(str(tmp_path), "i18n").asset_path("en-US", name, "json")

    def test_list_skips_unregistered_and_directories(self, tmp_path: Path) -> None:
        """Only files in a registered format are listed, sorted by name."""
        write_files(
            tmp_path,
            {
                "i18n/en-US/b.json": "{}",
                "i18n/en-US/a.json": "{}",
                "i18n/en-US/notes.txt": "x",
                "i18n/en-US/nested/c.json": "{}",
            },
        )
        loader = PathAssetLoader(str(tmp_path), "i18n")
        assert [p.name for p in loader.list_assets("en-US")] == ["a.json", "b.json"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        """A missing locale directory raises unless missing_ok."""
        loader = PathAssetLoader(str(tmp_path), "i18n")
        assert loader.list_assets("en-US", missing_ok=True) == []
        with pytest.raises(AssetLoadError) as info:
            loader.list_assets("en-US")
        assert info.value.locale == "en-US"


class TestLoadTranslations:
    """Concurrent loading of several locales."""

    def test_loads_and_merges_files_per_locale(self, tmp_path: Path) -> None:
        """Files of one locale are deep-merged; locales stay independent."""
        write_files(
            tmp_path,
            {
                "i18n/en-US/home.json": json.dumps({"home": {"title": "Home"}}),
                "i18n/en-US/nav.json": json.dumps({"nav": {"back": "Back"}}),
                "i18n/it-IT/app.json": json.dumps({"home": {"title": "Casa"}}),
            },
        )
        trees = load_translations(PathAssetLoader(str(tmp_path), "i18n"), ["en-US", "it-IT"], max_workers=2)
        assert trees == {
            "en-US": {"home": {"title": "Home"}, "nav": {"back": "Back"}},
            "it-IT": {"home": {"title": "Casa"}},
        }
        assert list(trees) == ["en-US", "it-IT"]

    def test_empty_file_ignored(self, tmp_path: Path) -> None:
        """Blank asset files contribute nothing."""
        write_files(tmp_path, {"i18n/en-US/app.json": "  \n"})
        assert load_translations(PathAssetLoader(str(tmp_path), "i18n"), ["en-US"]) == {"en-US": {}}

    def test_missing_locale_ok(self, tmp_path: Path) -> None:
        """missing_ok turns a missing directory into an empty tree."""
        trees = load_translations(PathAssetLoader(str(tmp_path), "i18n"), ["en-US"], missing_ok=True)
        assert trees == {"en-US": {}}

    def test_undecodable_file(self, tmp_path: Path) -> None:
        """A file that is not UTF-8 raises AssetLoadError."""
        path = tmp_path / "i18n" / "en-US" / "app.json"
        path.parent.mkdir(parents=True)
        path.write_bytes(b"\xff\xfe{")
        with pytest.raises(AssetLoadError, match="Cannot read asset"):
            load_translations(PathAssetLoader(str(tmp_path), "i18n"), ["en-US"])

    def test_corrupt_file(self, tmp_path: Path) -> None:
        """Corrupt JSON raises AssetFormatError."""
        write_files(tmp_path, {"i18n/en-US/app.json": "{"})
        with pytest.raises(AssetFormatError):
            load_translations(PathAssetLoader(str(tmp_path), "i18n"), ["en-US"])
