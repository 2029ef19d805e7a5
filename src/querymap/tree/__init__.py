"""Tree subpackage: the value model and the algorithms that build it.

Re-exports the public API for the tree module:
- Scalar, ScalarList, DynamicList, QueryObject: the four value shapes
- ValueKind: StrEnum tagging the four shapes
- from_python: builds a tree from plain Python data
- combine, merge_into: the merge engine
- Segment, split_key, insert_path, insert_key: the bracket key-path parser
- NumericIndexNormalizer, normalize: folds numeric-keyed objects into lists
"""

from querymap.tree.keypath import Segment, insert_key, insert_path, split_key
from querymap.tree.merge import combine, merge_into
from querymap.tree.nodes import (
    DynamicList,
    QueryObject,
    Scalar,
    ScalarList,
    Value,
    ValueKind,
    from_python,
)
from querymap.tree.normalizer import NumericIndexNormalizer, normalize

__all__ = [
    "DynamicList",
    "NumericIndexNormalizer",
    "QueryObject",
    "Scalar",
    "ScalarList",
    "Segment",
    "Value",
    "ValueKind",
    "combine",
    "from_python",
    "insert_key",
    "insert_path",
    "merge_into",
    "normalize",
    "split_key",
]
