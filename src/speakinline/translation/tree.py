"""Translation tree primitives.

A translation tree maps path segments to either a leaf (string) or a
nested tree. These functions are the only code that walks or reshapes
trees.

Shape conflicts:
    A path is either a leaf or an interior node, never both. When a write
    would violate that (deep_set through an existing leaf, or a leaf over an
    existing node; deep_merge of a leaf against a node), the newer value
    replaces the older one. The functions report the conflict to their
    caller through ``on_conflict`` and never raise.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Sequence
from typing import Any

from speakinline.constants import DEFAULT_KEY_SEPARATOR, MAX_DEPTH

__all__ = [
    "Tree",
    "deep_merge",
    "deep_set",
    "get_value",
    "min_depth",
    "sort_tree",
]

logger = logging.getLogger(__name__)

type Tree = dict[str, Any]
"""Nested mapping of path segments to str leaves or further Trees."""

type ConflictHandler = Callable[[str], None]
"""Receives the dotted path of a replaced value of a different shape."""


def deep_set(
    tree: Tree,
    path: Sequence[str],
    value: str,
    on_conflict: ConflictHandler | None = None,
    *,
    separator: str = DEFAULT_KEY_SEPARATOR,
) -> None:
    """Write a leaf at path, creating intermediate nodes.

    Overwrites a prior leaf at exactly path and leaves siblings untouched.
    An intermediate segment holding a leaf is replaced by a new node; an
    interior node at path is replaced by the leaf.

    Args:
        tree: Tree to modify in place
        path: Non-empty list of segments
        value: Leaf to write
        on_conflict: Called with the dotted path of each replaced value of
            a different shape
        separator: Joins path segments in conflict reports

    Example:
        >>> tree = {}
        >>> deep_set(tree, ["home", "title"], "Home")
        >>> tree
        {'home': {'title': 'Home'}}
    """
    if not path:
        msg = "deep_set requires at least one path segment"
        raise ValueError(msg)
    node = tree
    for depth, segment in enumerate(path[:-1]):
        child = node.get(segment)
        if not isinstance(child, dict):
            if child is not None:
                _conflict(path[: depth + 1], on_conflict, separator)
            child = {}
            node[segment] = child
        node = child
    if isinstance(node.get(path[-1]), dict):
        _conflict(path, on_conflict, separator)
    node[path[-1]] = value


def deep_merge(
    target: Tree,
    source: Tree,
    on_conflict: ConflictHandler | None = None,
    _path: tuple[str, ...] = (),
    *,
    separator: str = DEFAULT_KEY_SEPARATOR,
) -> Tree:
    """Merge source into target; source wins on every conflict.

    Nodes present in both are merged recursively. Any other collision
    (leaf/leaf, leaf/node) takes the source value. Values copied from
    source are deep copies, so target never aliases source.

    Args:
        target: Tree to modify in place
        source: Tree whose values take precedence
        on_conflict: Called with the dotted path of each leaf/node collision
        separator: Joins path segments in conflict reports

    Returns:
        target, for chaining

    Example:
        >>> deep_merge({"a": {"x": "1", "y": "2"}}, {"a": {"y": "3"}})
        {'a': {'x': '1', 'y': '3'}}
    """
    if len(_path) > MAX_DEPTH:
        msg = f"Translation tree nested deeper than {MAX_DEPTH} levels"
        raise RecursionError(msg)
    for key, value in source.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            deep_merge(current, value, on_conflict, (*_path, key), separator=separator)
            continue
        if key in target and isinstance(current, dict) != isinstance(value, dict):
            _conflict((*_path, key), on_conflict, separator)
        target[key] = copy.deepcopy(value) if isinstance(value, dict) else value
    return target


def get_value(
    key: str, tree: Tree | None, separator: str = DEFAULT_KEY_SEPARATOR
) -> str | None:
    """Return the leaf at a dotted key.

    Returns:
        The leaf string, or None if the tree is absent, a segment is
        missing, or the key ends on an interior node

    Example:
        >>> get_value("SUBKEY1.AA", {"SUBKEY1": {"AA": "aa"}})
        'aa'
        >>> get_value("SUBKEY1", {"SUBKEY1": {"AA": "aa"}}) is None
        True
    """
    node: Any = tree
    for segment in key.split(separator):
        if not isinstance(node, dict) or segment not in node:
            return None
        node = node[segment]
    return node if isinstance(node, str) else None


def sort_tree(tree: Tree) -> Tree:
    """Return a copy with keys ordered lexicographically at every level."""
    return {
        key: sort_tree(value) if isinstance(value, dict) else value
        for key, value in sorted(tree.items())
    }


def min_depth(tree: Tree) -> int:
    """Return the depth of the shallowest leaf, counted from 1.

    An empty tree has depth 0; an empty nested node counts as a leaf at its
    own level.

    Example:
        >>> min_depth({"title": "Home", "nav": {"back": "Back"}})
        1
        >>> min_depth({"home": {"title": "Home"}, "nav": {"back": "Back"}})
        2
    """
    if not tree:
        return 0
    return 1 + min(
        min_depth(value) if isinstance(value, dict) else 0 for value in tree.values()
    )


def _conflict(
    path: Sequence[str], on_conflict: ConflictHandler | None, separator: str
) -> None:
    dotted = separator.join(path)
    logger.warning("Shape conflict at '%s': replacing existing value", dotted)
    if on_conflict is not None:
        on_conflict(dotted)
