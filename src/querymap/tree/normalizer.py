"""NumericIndexNormalizer: folds numerically keyed objects into lists.

After all raw keys are ingested, ``b[0]=x&b[1]=y`` has produced the object
``{"0": "x", "1": "y"}``. This pass rewrites every non-empty object whose
keys are all base-10 integer literals into a DynamicList of its values.

Known ordering anomaly: the values are taken in the order of the keys
compared as TEXT, not as numbers, so ``"10"`` comes before ``"2"``. This only
differs from numeric order once an index has two or more digits. It is kept
as-is until the intended order for such indices is settled.
"""

from __future__ import annotations

import re

from querymap.tree.nodes import DynamicList, QueryObject, Scalar, ScalarList, Value

__all__ = ["NumericIndexNormalizer", "normalize"]

# Optional sign followed by ASCII digits; no whitespace, underscores or
# non-ASCII digits (str.isdigit and int() accept those).
_INDEX_KEY = re.compile(r"[+-]?[0-9]+")


def is_index_key(key: str) -> bool:
    """Return True if *key* is a base-10 integer literal."""
    return _INDEX_KEY.fullmatch(key) is not None


def normalize(value: Value) -> Value:
    """Return *value* with every all-numeric object folded into a list.

    Objects that stay objects are rewritten in place; lists are rebuilt.
    Applying the pass to its own output changes nothing.
    """
    match value:
        case Scalar() | ScalarList():
            return value
        case DynamicList(items=items):
            return DynamicList([normalize(item) for item in items])
        case QueryObject():
            if value.entries and all(is_index_key(key) for key in value.entries):
                # sorted() on str keys: lexicographic, see module docstring
                return DynamicList([normalize(item) for item in value.values()])
            for key, item in value.items():
                value.entries[key] = normalize(item)
            return value


class NumericIndexNormalizer:
    """Applies the numeric-index pass to the top-level values of a root.

    Example usage:
        normalizer = NumericIndexNormalizer()
        normalizer.normalize_root(root)   # root keeps its identity
    """

    def is_index_key(self, key: str) -> bool:
        return is_index_key(key)

    def normalize(self, value: Value) -> Value:
        return normalize(value)

    def normalize_root(self, root: QueryObject) -> QueryObject:
        """Normalize every top-level value of *root* in place.

        The root itself is never folded, even when all of its keys are
        numeric: the root of a tree is always an object.
        """
        for key, item in root.items():
            root.entries[key] = normalize(item)
        return root
