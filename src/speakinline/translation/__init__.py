"""Translation store, tree primitives, asset formats and loading.

Submodules:
    tree    - deep_set, deep_merge, get_value, sort_tree, min_depth
    store   - TranslationStore (one tree per locale)
    formats - AssetFormat protocol and format registry (JSON built in)
    loading - PathAssetLoader and concurrent load_translations

Python 3.13+. Zero external dependencies.
"""

from speakinline.translation.formats import (
    AssetFormat,
    JsonFormat,
    get_format,
    register_format,
    registered_formats,
)
from speakinline.translation.loading import PathAssetLoader, load_translations
from speakinline.translation.store import TranslationStore
from speakinline.translation.tree import (
    Tree,
    deep_merge,
    deep_set,
    get_value,
    min_depth,
    sort_tree,
)

__all__ = [
    "AssetFormat",
    "JsonFormat",
    "PathAssetLoader",
    "TranslationStore",
    "Tree",
    "deep_merge",
    "deep_set",
    "get_format",
    "get_value",
    "load_translations",
    "min_depth",
    "register_format",
    "registered_formats",
    "sort_tree",
]
