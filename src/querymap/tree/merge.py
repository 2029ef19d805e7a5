"""Merge engine: combines values written to the same key.

When a key is written more than once the result shape is fixed by the
(existing, incoming) pair of shapes:

    existing \\ incoming | Scalar      | ScalarList  | DynamicList | Object
    ---------------------+-------------+-------------+-------------+-------------
    Scalar               | ScalarList  | ScalarList  | DynamicList | DynamicList
    ScalarList           | ScalarList  | ScalarList  | DynamicList | DynamicList
    DynamicList          | DynamicList | DynamicList | DynamicList | DynamicList
    Object               | DynamicList | DynamicList | DynamicList | deep merge

Lists are spliced, everything else is appended as a single item. Object +
Object is the only combination that recurses key by key. Every combination
is defined, so merging never fails.
"""

from __future__ import annotations

from querymap.tree.nodes import DynamicList, QueryObject, Scalar, ScalarList, Value

__all__ = ["combine", "merge_into"]


def _flatten(value: Value) -> list[Value]:
    """Items contributed by *value* when it joins a DynamicList."""
    match value:
        case ScalarList(values=values):
            return [Scalar(v) for v in values]
        case DynamicList(items=items):
            return list(items)
        case _:
            return [value]


def combine(existing: Value, incoming: Value) -> Value:
    """Return the value stored when *incoming* is written over *existing*.

    Object + Object mutates and returns *existing*; every other combination
    builds a new list and leaves both arguments untouched.
    """
    match existing, incoming:
        case Scalar(value=e), Scalar(value=i):
            return ScalarList([e, i])
        case Scalar(value=e), ScalarList(values=i):
            return ScalarList([e, *i])
        case ScalarList(values=e), Scalar(value=i):
            return ScalarList([*e, i])
        case ScalarList(values=e), ScalarList(values=i):
            return ScalarList([*e, *i])
        case QueryObject(), QueryObject():
            for key, value in incoming.items():
                merge_into(existing, key, value)
            return existing
        case _:
            return DynamicList([*_flatten(existing), *_flatten(incoming)])


def merge_into(obj: QueryObject, key: str, value: Value) -> QueryObject:
    """Store *value* under *key* in *obj*, combining with any existing value."""
    existing = obj.entries.get(key)
    if existing is None:
        obj.entries[key] = value
    else:
        obj.entries[key] = combine(existing, value)
    return obj
