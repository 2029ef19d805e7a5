"""StructDecoder: decodes a value tree into a typed record with pydantic.

Targets are pydantic models, whose field aliases play the role of external
name tags, or any other type accepted by ``pydantic.TypeAdapter``
(dataclasses, ``dict[str, Any]``, ``list[str]`` ...).

pydantic collects every field failure before raising, so a single
DecodeError reports all of them.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar, get_origin, overload

from pydantic import BaseModel, TypeAdapter, ValidationError

from querymap.decoding.coercion import WeakCoercer
from querymap.decoding.config import DecoderConfig
from querymap.errors import DecodeError, FieldError
from querymap.tree.nodes import Value

__all__ = ["StructDecoder"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _field_errors(exc: ValidationError) -> list[FieldError]:
    """Convert pydantic's error list to FieldErrors named by location."""
    return [
        FieldError(
            field=".".join(str(part) for part in error["loc"]),
            cause=error["msg"],
        )
        for error in exc.errors(include_url=False)
    ]


class StructDecoder:
    """Decodes QueryObject trees into instances of a target type.

    Example::

        class Filter(BaseModel):
            first_name: str = Field(alias="firstName")
            limit: int = 25

        tree = from_query_string("firstName=Ken&limit=10")
        StructDecoder().decode(tree, Filter)
        # Filter(first_name="Ken", limit=10)
    """

    def __init__(self, config: DecoderConfig | None = None) -> None:
        self._config = config if config is not None else DecoderConfig()
        self._coercer = WeakCoercer(config=self._config)

    @property
    def config(self) -> DecoderConfig:
        return self._config

    @overload
    def decode(self, tree: Value | dict[str, Any], target: type[T]) -> T: ...

    @overload
    def decode(self, tree: Value | dict[str, Any], target: Any) -> Any: ...

    def decode(self, tree: Value | dict[str, Any], target: Any) -> Any:
        """Decode *tree* into an instance of *target*.

        Args:
            tree:   A value tree, usually the root QueryObject, or the plain
                    data returned by its ``to_python()``.
            target: A pydantic model class or any type pydantic can validate.

        Returns:
            The validated instance.

        Raises:
            DecodeError: If one or more fields cannot be decoded. The original
                ValidationError is chained as ``__cause__``.
        """
        data = tree if isinstance(tree, dict) else tree.to_python()
        strict = not self._config.weakly_typed
        if self._config.weakly_typed:
            data = self._coercer.coerce(data, target)

        logger.debug("Decoding query tree into %r (strict=%s)", target, strict)
        try:
            return self._validate(data, target, strict)
        except ValidationError as exc:
            errors = _field_errors(exc)
            logger.debug("Decoding into %r failed: %d error(s)", target, len(errors))
            shown = self._config.max_errors
            raise DecodeError(errors, target=target, shown=shown) from exc

    def _validate(self, data: Any, target: Any, strict: bool) -> Any:
        by_alias = self._config.by_alias
        is_class = isinstance(target, type) and get_origin(target) is None
        if is_class and issubclass(target, BaseModel):
            return target.model_validate(
                data, strict=strict, by_alias=by_alias, by_name=not by_alias
            )
        adapter: TypeAdapter[Any] = TypeAdapter(target)
        return adapter.validate_python(
            data, strict=strict, by_alias=by_alias, by_name=not by_alias
        )
