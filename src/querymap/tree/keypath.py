"""Key-path parser for PHP-style bracket keys.

Grammar::

    key   := name ( "[" inner "]" )*
    inner := "" | name

The name before the first bracket group is the first path segment. Every
bracket group adds one segment; an empty group (``[]``) is an append marker.

An append marker is only honoured as the very last segment of a key, where
it stores all values of the key as a flat list (``tags[]=a&tags[]=b``). In
any other position (``names[][firstName]``) it is a literal empty-string key.
Auto-indexing in the middle of a path would make the result depend on the
order in which keys are seen, so it is not supported.

Malformed keys never raise. A key without a complete bracket group is a
single literal name, and text after the last well-formed group becomes one
final literal segment.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from querymap.tree.nodes import QueryObject, Scalar, ScalarList, Value

__all__ = ["Segment", "insert_key", "insert_path", "split_key"]


@dataclass(frozen=True, slots=True)
class Segment:
    """One component of a bracket key.

    Attributes:
        name:   Literal key at this level ("" for an append marker).
        append: True when the segment came from an empty ``[]`` group.
    """

    name: str
    append: bool = False


def split_key(raw_key: str) -> list[Segment]:
    """Decompose *raw_key* into path segments.

    Examples::

        split_key("a")        # [Segment("a")]
        split_key("a[b][c]")  # [Segment("a"), Segment("b"), Segment("c")]
        split_key("tags[]")   # [Segment("tags"), Segment("", append=True)]
        split_key("a[b")      # [Segment("a[b")]
    """
    start = raw_key.find("[")
    if start == -1 or raw_key.find("]", start) == -1:
        return [Segment(raw_key)]

    segments = [Segment(raw_key[:start])]
    pos = start
    while pos < len(raw_key):
        end = raw_key.find("]", pos + 1)
        if raw_key[pos] != "[" or end == -1:
            segments.append(Segment(raw_key[pos:]))
            break
        inner = raw_key[pos + 1 : end]
        segments.append(Segment(inner, append=not inner))
        pos = end + 1

    return segments


def _leaf(values: Sequence[str]) -> Value:
    if len(values) == 1:
        return Scalar(values[0])
    return ScalarList(list(values))


def insert_path(
    obj: QueryObject, segments: Sequence[Segment], values: Sequence[str]
) -> QueryObject:
    """Merge *values* into *obj* at the path described by *segments*.

    Each level below the first is built as a fresh QueryObject by recursive
    descent and merged into its parent, so repeated paths are combined by the
    merge engine rather than overwritten.
    """
    head, rest = segments[0], segments[1:]

    if not rest:
        return obj.merge(head.name, _leaf(values))

    if len(rest) == 1 and rest[0].append:
        return obj.merge(head.name, ScalarList(list(values)))

    child = insert_path(QueryObject(), rest, values)
    return obj.merge(head.name, child)


def insert_key(obj: QueryObject, raw_key: str, values: Sequence[str]) -> QueryObject:
    """Parse *raw_key* and merge *values* into *obj* at the resulting path."""
    return insert_path(obj, split_key(raw_key), values)
