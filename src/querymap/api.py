"""Public API functions for querymap.

Parsing functions return a QueryObject tree; the ``*_to_struct`` functions
additionally decode that tree into a target type. Each call creates a fresh
QueryMapBuilder (and StructDecoder) so no state is shared between calls.

URL errors (URLParseError) and decode errors (DecodeError) are raised
unchanged to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any
from urllib.parse import ParseResult, SplitResult, parse_qs, urlsplit

from querymap.builder import QueryMapBuilder
from querymap.decoding.config import DecoderConfig
from querymap.decoding.decoder import StructDecoder
from querymap.errors import URLParseError
from querymap.tree.nodes import QueryObject

__all__ = [
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

logger = logging.getLogger(__name__)

URLLike = SplitResult | ParseResult | str


def parse_url(raw_url: str) -> SplitResult:
    """Split a raw URL string into its components.

    Raises:
        URLParseError: If *raw_url* starts with ":" (no scheme before the
            colon), contains an ASCII control character, or is rejected by
            ``urllib.parse.urlsplit`` (e.g. an unbalanced IPv6 host).
    """
    if any(ord(char) < 0x20 or ord(char) == 0x7F for char in raw_url):
        raise URLParseError(raw_url, "invalid control character in URL")
    if raw_url.startswith(":"):
        raise URLParseError(raw_url, "missing protocol scheme")
    try:
        return urlsplit(raw_url)
    except ValueError as exc:
        raise URLParseError(raw_url, str(exc)) from exc


def from_values(values: Mapping[str, Sequence[str] | str]) -> QueryObject:
    """Build a tree from decoded query values (``{raw_key: [values]}``).

    Args:
        values: Already percent-decoded values, as returned by
                ``urllib.parse.parse_qs(..., keep_blank_values=True)``.

    Returns:
        The root QueryObject.
    """
    return QueryMapBuilder().build(values)


def from_pairs(pairs: Iterable[tuple[str, str]]) -> QueryObject:
    """Build a tree from decoded ``(key, value)`` pairs.

    Repeated keys are allowed; their values are combined in the order given.
    """
    return QueryMapBuilder().build_pairs(pairs)


def from_query_string(query: str) -> QueryObject:
    """Build a tree from a raw query string (without the leading ``?``).

    Blank values are kept (``b=`` gives ``""``) and empty pairs are skipped.
    """
    return from_values(parse_qs(query, keep_blank_values=True))


def from_url(url: URLLike) -> QueryObject:
    """Build a tree from the query component of *url*.

    Args:
        url: A ``urlsplit``/``urlparse`` result, or a raw URL string.

    Raises:
        URLParseError: If *url* is a string that cannot be parsed.
    """
    if isinstance(url, str):
        url = parse_url(url)
    return from_query_string(url.query)


def to_struct(
    tree: QueryObject, target: Any, config: DecoderConfig | None = None
) -> Any:
    """Decode *tree* into an instance of *target*.

    Raises:
        DecodeError: If one or more fields cannot be decoded.
    """
    return StructDecoder(config=config).decode(tree, target)


def from_url_to_struct(
    url: URLLike, target: Any, config: DecoderConfig | None = None
) -> Any:
    """Combine ``from_url`` and ``to_struct``."""
    return to_struct(from_url(url), target, config=config)


def from_values_to_struct(
    values: Mapping[str, Sequence[str] | str],
    target: Any,
    config: DecoderConfig | None = None,
) -> Any:
    """Combine ``from_values`` and ``to_struct``."""
    return to_struct(from_values(values), target, config=config)


def from_url_string_to_struct(
    raw_url: str, target: Any, config: DecoderConfig | None = None
) -> Any:
    """Parse *raw_url* and decode its query straight into *target*.

    Raises:
        URLParseError: If *raw_url* cannot be parsed.
        DecodeError:   If the query cannot be decoded into *target*.
    """
    logger.debug("Decoding query of %r", raw_url)
    return from_url_to_struct(parse_url(raw_url), target, config=config)
