"""Value tree types produced by parsing bracket-notation query keys.

The tree is a closed variant of exactly four shapes, each tagged with a
``ValueKind``:

- Scalar       -> "scalar"       : a single text value
- ScalarList   -> "scalar_list"  : an ordered list of text values
- DynamicList  -> "dynamic_list" : an ordered list of values of any shape
- QueryObject  -> "object"       : a mapping from text key to value

Objects present their keys in ascending lexicographic order regardless of
insertion order, so the output is deterministic.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any, ClassVar


class ValueKind(StrEnum):
    """Enumeration of the four value shapes.

    StrEnum values are the lowercased member names:
    - SCALAR        -> "scalar"
    - SCALAR_LIST   -> "scalar_list"
    - DYNAMIC_LIST  -> "dynamic_list"
    - OBJECT        -> "object"
    """

    SCALAR = auto()
    SCALAR_LIST = auto()
    DYNAMIC_LIST = auto()
    OBJECT = auto()


@dataclass(slots=True)
class Scalar:
    """A single text leaf."""

    kind: ClassVar[ValueKind] = ValueKind.SCALAR

    value: str

    def to_python(self) -> str:
        return self.value


@dataclass(slots=True)
class ScalarList:
    """An ordered list of text leaves (no further nesting)."""

    kind: ClassVar[ValueKind] = ValueKind.SCALAR_LIST

    values: list[str] = field(default_factory=list)

    def to_python(self) -> list[str]:
        return list(self.values)


@dataclass(slots=True)
class DynamicList:
    """An ordered list whose items may be of any of the four shapes."""

    kind: ClassVar[ValueKind] = ValueKind.DYNAMIC_LIST

    items: list[Value] = field(default_factory=list)

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]


@dataclass(slots=True, repr=False)
class QueryObject:
    """A mapping from text key to value.

    Attributes:
        entries: Underlying storage. Must use field(default_factory=dict) so
                 every object gets its own dict. Writes should go through
                 ``merge`` so that repeated keys are combined, not overwritten.

    Iteration, ``keys()``, ``values()`` and ``items()`` all follow the
    ascending lexicographic order of the keys.
    """

    kind: ClassVar[ValueKind] = ValueKind.OBJECT

    entries: dict[str, Value] = field(default_factory=dict)

    def merge(self, key: str, value: Value) -> QueryObject:
        """Associate *value* with *key*, combining with any existing value."""
        # Imported lazily: merge.py depends on the types defined here.
        from querymap.tree.merge import merge_into

        merge_into(self, key, value)
        return self

    def keys(self) -> list[str]:
        return sorted(self.entries)

    def values(self) -> list[Value]:
        return [self.entries[key] for key in self.keys()]

    def items(self) -> list[tuple[str, Value]]:
        return [(key, self.entries[key]) for key in self.keys()]

    def get(self, key: str, default: Value | None = None) -> Value | None:
        return self.entries.get(key, default)

    def __getitem__(self, key: str) -> Value:
        return self.entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"QueryObject({self.to_python()!r})"

    def to_python(self) -> dict[str, Any]:
        return {key: value.to_python() for key, value in self.items()}


Value = Scalar | ScalarList | DynamicList | QueryObject


def from_python(data: Any) -> Value:
    """Build a value tree from plain Python data.

    ``str`` becomes a Scalar, a list made only of strings becomes a
    ScalarList, any other list becomes a DynamicList and a dict becomes a
    QueryObject. Existing tree values are returned as-is.

    Raises:
        TypeError: If *data* (or anything nested in it) is none of the above.
    """
    if isinstance(data, (Scalar, ScalarList, DynamicList, QueryObject)):
        return data

    if isinstance(data, str):
        return Scalar(data)

    if isinstance(data, (list, tuple)):
        if all(isinstance(item, str) for item in data):
            return ScalarList(list(data))
        return DynamicList([from_python(item) for item in data])

    if isinstance(data, dict):
        return QueryObject({str(key): from_python(val) for key, val in data.items()})

    raise TypeError(f"Unsupported value type: {type(data)!r}")
