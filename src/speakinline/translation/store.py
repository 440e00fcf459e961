"""In-memory translation store: one tree per locale.

The store owns its trees for the duration of one pipeline run. Trees
passed in are copied and trees handed out by partitions() are fresh, so
callers never alias store state.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterable, Mapping

from speakinline.constants import DEFAULT_KEY_SEPARATOR, UNPARTITIONED_ASSET
from speakinline.translation.tree import (
    Tree,
    deep_merge,
    deep_set,
    get_value,
    min_depth,
    sort_tree,
)

__all__ = ["TranslationStore"]

type LocaleConflictHandler = Callable[[str, str], None]
"""Receives (locale, dotted path) of each shape conflict."""


class TranslationStore:
    """Layered mapping of locale to translation tree.

    Example:
        >>> store = TranslationStore(["en-US", "it-IT"])
        >>> store.seed("home.title", "Home")
        >>> store.merge("it-IT", {"home": {"title": "Casa"}})
        >>> store.get("it-IT", "home.title")
        'Casa'
        >>> store.get("en-US", "home.title")
        'Home'
    """

    __slots__ = ("_key_separator", "_on_conflict", "_trees")

    def __init__(
        self,
        locales: Iterable[str],
        *,
        key_separator: str = DEFAULT_KEY_SEPARATOR,
        trees: Mapping[str, Tree] | None = None,
        on_conflict: LocaleConflictHandler | None = None,
    ) -> None:
        """Create a store with an empty tree per locale.

        Args:
            locales: Locales in configuration order
            key_separator: Separator of dotted keys
            trees: Initial trees by locale (copied; locales not listed are
                ignored)
            on_conflict: Called with (locale, dotted path) of every shape
                conflict resolved by overwrite
        """
        self._key_separator = key_separator
        self._on_conflict = on_conflict
        self._trees: dict[str, Tree] = {locale: {} for locale in locales}
        for locale, tree in (trees or {}).items():
            if locale in self._trees:
                self._trees[locale] = copy.deepcopy(tree)

    @property
    def locales(self) -> tuple[str, ...]:
        """Locales in configuration order."""
        return tuple(self._trees)

    @property
    def key_separator(self) -> str:
        """Separator of dotted keys."""
        return self._key_separator

    def __contains__(self, locale: object) -> bool:
        return locale in self._trees

    def tree(self, locale: str) -> Tree | None:
        """Return a copy of the tree of locale, or None if not configured."""
        tree = self._trees.get(locale)
        return None if tree is None else copy.deepcopy(tree)

    def _handler(self, locale: str) -> Callable[[str], None] | None:
        if self._on_conflict is None:
            return None
        on_conflict = self._on_conflict
        return lambda path: on_conflict(locale, path)

    def set(self, locale: str, key: str, value: str) -> None:
        """Write a leaf at a dotted key of one locale."""
        deep_set(
            self._trees[locale],
            key.split(self._key_separator),
            value,
            self._handler(locale),
            separator=self._key_separator,
        )

    def seed(self, key: str, value: str) -> None:
        """Write the same leaf at a dotted key of every locale."""
        for locale in self._trees:
            self.set(locale, key, value)

    def merge(self, locale: str, source: Tree) -> None:
        """Deep-merge source over the tree of locale (source wins)."""
        deep_merge(
            self._trees[locale], source, self._handler(locale), separator=self._key_separator
        )

    def get(self, locale: str, key: str) -> str | None:
        """Return the leaf at key in locale, or None (also for unknown locales)."""
        return get_value(key, self._trees.get(locale), self._key_separator)

    def sort(self) -> None:
        """Reorder every tree lexicographically at every level."""
        for locale, tree in self._trees.items():
            self._trees[locale] = sort_tree(tree)

    def min_depth(self, locale: str) -> int:
        """Return the depth of the shallowest leaf of locale (0 if empty)."""
        return min_depth(self._trees[locale])

    def partitions(self, locale: str) -> list[tuple[str, Tree]]:
        """Split the tree of locale into named output assets.

        Returns:
            One (top-level key, {top-level key: subtree}) pair per top-level
            key when every leaf is at depth > 1; otherwise a single
            ("app", whole tree) pair
        """
        tree = self._trees[locale]
        if min_depth(tree) > 1:
            return [(name, {name: copy.deepcopy(subtree)}) for name, subtree in tree.items()]
        return [(UNPARTITIONED_ASSET, copy.deepcopy(tree))]

    def to_dict(self) -> dict[str, Tree]:
        """Return a deep copy of all trees keyed by locale."""
        return copy.deepcopy(self._trees)
