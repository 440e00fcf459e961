"""Tests for TranslationStore."""

from __future__ import annotations

from speakinline.translation import TranslationStore


class TestTranslationStore:
    """Per-locale tree ownership."""

    def test_seed_writes_every_locale(self) -> None:
        """seed() writes the same leaf into each locale tree."""
        store = TranslationStore(["en-US", "it-IT"])
        store.seed("home.title", "Home")
        assert store.get("en-US", "home.title") == "Home"
        assert store.get("it-IT", "home.title") == "Home"

    def test_merge_wins_over_seed(self) -> None:
        """Merged values replace seeded defaults."""
        store = TranslationStore(["it-IT"])
        store.seed("home.title", "Home")
        store.merge("it-IT", {"home": {"title": "Casa"}})
        assert store.get("it-IT", "home.title") == "Casa"

    def test_unknown_locale_has_no_value(self) -> None:
        """Lookups in an unconfigured locale return None."""
        assert TranslationStore(["en-US"]).get("fr-FR", "a") is None
        assert "fr-FR" not in TranslationStore(["en-US"])

    def test_initial_trees_are_copied(self) -> None:
        """The store does not alias trees passed in."""
        tree = {"a": {"b": "x"}}
        store = TranslationStore(["en-US"], trees={"en-US": tree, "de-DE": {"c": "y"}})
        tree["a"]["b"] = "changed"
        assert store.get("en-US", "a.b") == "x"
        assert store.locales == ("en-US",)

    def test_tree_returns_copy(self) -> None:
        """Mutating a returned tree leaves the store intact."""
        store = TranslationStore(["en-US"], trees={"en-US": {"a": "x"}})
        tree = store.tree("en-US")
        assert tree is not None
        tree["a"] = "changed"
        assert store.get("en-US", "a") == "x"
        assert store.tree("fr-FR") is None

    def test_custom_key_separator(self) -> None:
        """Keys are split on the configured separator."""
        store = TranslationStore(["en-US"], key_separator="/")
        store.set("en-US", "a/b", "x")
        assert store.to_dict() == {"en-US": {"a": {"b": "x"}}}

    def test_conflicts_reported_with_locale(self) -> None:
        """The conflict handler receives the locale and dotted path."""
        seen: list[tuple[str, str]] = []
        store = TranslationStore(["en-US"], on_conflict=lambda locale, path: seen.append((locale, path)))
        store.set("en-US", "a", "leaf")
        store.set("en-US", "a.b", "x")
        assert seen == [("en-US", "a")]

    def test_conflicts_reported_with_key_separator(self) -> None:
        """Conflict paths use the store's key separator."""
        seen: list[tuple[str, str]] = []
        store = TranslationStore(
            ["en-US"], key_separator="/", on_conflict=lambda locale, path: seen.append((locale, path))
        )
        store.set("en-US", "a/b", "leaf")
        store.set("en-US", "a/b/c", "x")
        store.merge("en-US", {"a": {"b": "again"}})
        assert seen == [("en-US", "a/b"), ("en-US", "a/b")]

    def test_sort(self) -> None:
        """sort() orders every tree."""
        store = TranslationStore(["en-US"], trees={"en-US": {"b": "1", "a": "2"}})
        store.sort()
        assert list(store.to_dict()["en-US"]) == ["a", "b"]


class TestPartitions:
    """Output partitioning by minimum depth."""

    def test_single_app_partition(self) -> None:
        """A tree with a top-level leaf is written as one 'app' asset."""
        store = TranslationStore(["en-US"], trees={"en-US": {"title": "T", "nav": {"a": "A"}}})
        assert store.partitions("en-US") == [("app", {"title": "T", "nav": {"a": "A"}})]

    def test_partition_per_top_level_key(self) -> None:
        """A tree with depth > 1 is split by top-level key."""
        store = TranslationStore(
            ["en-US"], trees={"en-US": {"home": {"t": "H"}, "nav": {"a": {"b": "A"}}}}
        )
        assert store.partitions("en-US") == [
            ("home", {"home": {"t": "H"}}),
            ("nav", {"nav": {"a": {"b": "A"}}}),
        ]
        assert store.min_depth("en-US") == 2

    def test_empty_tree(self) -> None:
        """An empty tree is one empty 'app' asset."""
        assert TranslationStore(["en-US"]).partitions("en-US") == [("app", {})]
