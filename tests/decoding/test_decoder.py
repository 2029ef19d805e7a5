"""Tests for StructDecoder: value tree -> pydantic model / TypeAdapter target.

Covers:
- Field mapping by alias (declared external names) and by attribute name
- Weak coercion of textual leaves (numbers, booleans, single -> list)
- Aggregated DecodeError formatting and chaining
- Strict mode
- Non-model targets through TypeAdapter
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest
from pydantic import BaseModel, Field, ValidationError

from querymap.builder import QueryMapBuilder
from querymap.decoding.config import DecoderConfig
from querymap.decoding.decoder import StructDecoder
from querymap.errors import DecodeError, FieldError
from querymap.tree.nodes import QueryObject

# ---------------------------------------------------------------------------
# Targets
# ---------------------------------------------------------------------------


class Names(BaseModel):
    names: list[str] = Field(default_factory=list)


class Person(BaseModel):
    first_name: str | None = Field(default=None, alias="firstName")


class People(BaseModel):
    names: list[Person] = Field(default_factory=list)


class Pagination(BaseModel):
    start_from: int = Field(alias="startFrom")
    limit: int = 25


class Search(BaseModel):
    name: str
    enabled: bool = False
    flag: bool = False
    pagination: Pagination | None = None


class Strict(BaseModel):
    age: int
    name: str


@dataclass
class Page:
    limit: int = 0
    tags: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Fixtures / helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def decoder() -> StructDecoder:
    """A StructDecoder with the default (weakly typed) configuration."""
    return StructDecoder()


def _tree(values: dict[str, list[str]]) -> QueryObject:
    return QueryMapBuilder().build(values)


# ---------------------------------------------------------------------------
# Field mapping and weak coercion
# ---------------------------------------------------------------------------


class TestLists:
    def test_indexed_list(self, decoder: StructDecoder) -> None:
        result = decoder.decode(_tree({"names[0]": ["John"]}), Names)
        assert result.names == ["John"]

    def test_append_list(self, decoder: StructDecoder) -> None:
        result = decoder.decode(_tree({"names[]": ["John"]}), Names)
        assert result.names == ["John"]

    def test_single_value_into_list(self, decoder: StructDecoder) -> None:
        result = decoder.decode(_tree({"names": ["John"]}), Names)
        assert result.names == ["John"]

    def test_indexed_list_of_models(self, decoder: StructDecoder) -> None:
        result = decoder.decode(_tree({"names[0][firstName]": ["John"]}), People)
        assert result.names == [Person(firstName="John")]

    def test_abbreviated_list_of_models_not_supported(
        self, decoder: StructDecoder
    ) -> None:
        """names[][firstName] nests under "" instead of building a list item."""
        tree = _tree({"names[][firstName]": ["John"]})
        assert tree.to_python() == {"names": {"": {"firstName": "John"}}}
        result = decoder.decode(tree, People)
        assert result.names != [Person(firstName="John")]


class TestScalars:
    def test_numbers_and_booleans_from_text(self, decoder: StructDecoder) -> None:
        tree = _tree(
            {
                "name": ["Ken"],
                "enabled": ["false"],
                "flag": ["true"],
                "pagination[startFrom]": ["984"],
                "pagination[limit]": ["10"],
            }
        )
        result = decoder.decode(tree, Search)
        assert result.name == "Ken"
        assert result.enabled is False
        assert result.flag is True
        assert result.pagination == Pagination(startFrom=984, limit=10)

    def test_empty_string_into_int(self, decoder: StructDecoder) -> None:
        result = decoder.decode(_tree({"startFrom": [""]}), Pagination)
        assert result.start_from == 0

    def test_single_append_into_scalar(self, decoder: StructDecoder) -> None:
        result = decoder.decode(_tree({"name[]": ["Ken"]}), Search)
        assert result.name == "Ken"

    def test_plain_dict_input(self, decoder: StructDecoder) -> None:
        result = decoder.decode({"name": "Ken"}, Search)
        assert result.name == "Ken"


class TestFieldNames:
    def test_attribute_name_rejected_by_default(self, decoder: StructDecoder) -> None:
        with pytest.raises(DecodeError):
            decoder.decode(_tree({"start_from": ["1"]}), Pagination)

    def test_attribute_name_when_not_by_alias(self) -> None:
        decoder = StructDecoder(DecoderConfig(by_alias=False))
        result = decoder.decode(_tree({"start_from": ["1"]}), Pagination)
        assert result.start_from == 1


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestDecodeErrors:
    def test_single_error_message(self, decoder: StructDecoder) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decoder.decode(_tree({"age": ["abc"], "name": ["x"]}), Strict)
        assert str(exc_info.value) == (
            "1 error(s) decoding:\n\n"
            "* age: Input should be a valid integer, unable to parse string as an integer"
        )

    def test_errors_aggregated_and_sorted(self, decoder: StructDecoder) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decoder.decode(_tree({"age": ["abc"]}), Strict)
        error = exc_info.value
        assert str(error).startswith("2 error(s) decoding:\n\n")
        lines = str(error).split("\n")[2:]
        assert lines == [
            "* age: Input should be a valid integer, unable to parse string as an integer",
            "* name: Field required",
        ]
        assert [e.field for e in error.errors] == ["age", "name"]

    def test_nested_field_uses_alias_path(self, decoder: StructDecoder) -> None:
        tree = _tree({"name": ["x"], "pagination[startFrom]": ["soon"]})
        with pytest.raises(DecodeError) as exc_info:
            decoder.decode(tree, Search)
        assert exc_info.value.errors[0].field == "pagination.startFrom"

    def test_chained_to_validation_error(self, decoder: StructDecoder) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decoder.decode(_tree({}), Strict)
        assert isinstance(exc_info.value.__cause__, ValidationError)
        assert exc_info.value.target is Strict

    def test_is_value_error(self, decoder: StructDecoder) -> None:
        with pytest.raises(ValueError):
            decoder.decode(_tree({}), Strict)

    def test_max_errors_truncates_listing(self) -> None:
        decoder = StructDecoder(DecoderConfig(max_errors=1))
        with pytest.raises(DecodeError) as exc_info:
            decoder.decode(_tree({}), Strict)
        assert str(exc_info.value) == (
            "2 error(s) decoding:\n\n* age: Field required\n* ... and 1 more"
        )
        assert len(exc_info.value.errors) == 2

    def test_root_error_has_no_field(self, decoder: StructDecoder) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decoder.decode(_tree({"a": ["1"]}), int)
        assert exc_info.value.errors == [FieldError("", "Input should be a valid integer")]
        assert str(exc_info.value).endswith("\n* Input should be a valid integer")


# ---------------------------------------------------------------------------
# Strict mode
# ---------------------------------------------------------------------------


class TestStrictMode:
    def test_text_not_coerced(self) -> None:
        decoder = StructDecoder(DecoderConfig(weakly_typed=False))
        with pytest.raises(DecodeError) as exc_info:
            decoder.decode(_tree({"age": ["3"], "name": ["x"]}), Strict)
        assert [e.field for e in exc_info.value.errors] == ["age"]

    def test_single_value_not_wrapped(self) -> None:
        decoder = StructDecoder(DecoderConfig(weakly_typed=False))
        with pytest.raises(DecodeError):
            decoder.decode(_tree({"names": ["John"]}), Names)

    def test_matching_shapes_accepted(self) -> None:
        decoder = StructDecoder(DecoderConfig(weakly_typed=False))
        result = decoder.decode(_tree({"names[]": ["a", "b"]}), Names)
        assert result.names == ["a", "b"]


# ---------------------------------------------------------------------------
# TypeAdapter targets
# ---------------------------------------------------------------------------


class TestAdapterTargets:
    def test_dict_target(self, decoder: StructDecoder) -> None:
        result = decoder.decode(_tree({"a[b]": ["1"]}), dict[str, Any])
        assert result == {"a": {"b": "1"}}

    def test_dataclass_target(self, decoder: StructDecoder) -> None:
        result = decoder.decode(_tree({"limit": ["5"], "tags": ["x"]}), Page)
        assert result == Page(limit=5, tags=["x"])

    def test_config_property(self) -> None:
        config = DecoderConfig(max_errors=2)
        assert StructDecoder(config).config is config
