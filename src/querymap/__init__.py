"""querymap - nested value trees from PHP-style bracket query keys."""

from __future__ import annotations

from querymap.api import (
    from_pairs,
    from_query_string,
    from_url,
    from_url_string_to_struct,
    from_url_to_struct,
    from_values,
    from_values_to_struct,
    parse_url,
    to_struct,
)
from querymap.builder import QueryMapBuilder
from querymap.decoding.config import DecoderConfig
from querymap.decoding.decoder import StructDecoder
from querymap.errors import DecodeError, FieldError, QueryMapError, URLParseError
from querymap.tree.nodes import (
    DynamicList,
    QueryObject,
    Scalar,
    ScalarList,
    Value,
    ValueKind,
)

__version__: str = "0.1.0"
__all__: list[str] = [
    "DecodeError",
    "DecoderConfig",
    "DynamicList",
    "FieldError",
    "QueryMapBuilder",
    "QueryMapError",
    "QueryObject",
    "Scalar",
    "ScalarList",
    "StructDecoder",
    "URLParseError",
    "Value",
    "ValueKind",
    "from_pairs",
    "from_query_string",
    "from_url",
    "from_url_string_to_struct",
    "from_url_to_struct",
    "from_values",
    "from_values_to_struct",
    "parse_url",
    "to_struct",
]
