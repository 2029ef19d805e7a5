"""QueryMapBuilder: turns decoded query values into a normalized value tree.

Architecture:
- build() sorts the raw keys, parses each one into the shared root via the
  key-path parser (which merges through the merge engine), then runs the
  numeric-index normalizer over every top-level value.
- The raw keys are sorted because merging is order sensitive: for
  ``b[]=1&b=2`` the key ``"b"`` is ingested first, so the result is
  ``["2", "1"]``.
- Every call works on a fresh root. A builder holds no per-call state and
  can be reused or shared between threads.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from querymap.tree.keypath import insert_key
from querymap.tree.nodes import QueryObject
from querymap.tree.normalizer import NumericIndexNormalizer

__all__ = ["QueryMapBuilder"]

logger = logging.getLogger(__name__)


class QueryMapBuilder:
    """Pipeline from ``{raw_key: [values]}`` to a QueryObject tree.

    Example::

        builder = QueryMapBuilder()
        tree = builder.build({"a[b]": ["1"], "a[c][]": ["2", "3"]})
        tree.to_python()
        # {"a": {"b": "1", "c": ["2", "3"]}}
    """

    def __init__(self, normalizer: NumericIndexNormalizer | None = None) -> None:
        if normalizer is None:
            normalizer = NumericIndexNormalizer()
        self._normalizer = normalizer

    def build(self, values: Mapping[str, Sequence[str] | str]) -> QueryObject:
        """Build the tree for already percent-decoded query values.

        Args:
            values: Mapping from raw key to its ordered list of values. A bare
                    string is accepted as a one-element list.

        Returns:
            The root QueryObject (empty when *values* is empty).
        """
        root = QueryObject()
        raw_keys = sorted(values)
        logger.debug("Building query tree from %d raw keys", len(raw_keys))

        for raw_key in raw_keys:
            raw_values = values[raw_key]
            if isinstance(raw_values, str):
                raw_values = [raw_values]
            insert_key(root, raw_key, raw_values)

        return self._normalizer.normalize_root(root)

    def build_pairs(self, pairs: Iterable[tuple[str, str]]) -> QueryObject:
        """Build the tree from ``(key, value)`` pairs.

        Repeated keys are coalesced into one value list, in the order the
        pairs are given, before building.
        """
        coalesced: dict[str, list[str]] = {}
        for key, value in pairs:
            coalesced.setdefault(key, []).append(value)
        return self.build(coalesced)
