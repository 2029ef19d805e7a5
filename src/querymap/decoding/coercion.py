"""WeakCoercer: reshapes plain tree data to fit the target's annotations.

pydantic's lax mode already converts numeric text to numbers and
"true"/"false" to booleans. Query strings need a few more conversions that
depend on the shape of the target field, so they are applied beforehand by
walking the data and the target type together:

- a single value (text or object) into a list field -> one-element list
- a one-element list into a scalar field            -> that element
- an empty string into an int/float field           -> 0
- a list of objects into a model or dict field      -> objects merged in order
- an empty list into a dict field, an empty dict into a list field -> empty

Anything the coercer does not recognise is passed through untouched and
left for pydantic to accept or reject.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import types
from dataclasses import dataclass, field
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from querymap.decoding.config import DecoderConfig

__all__ = ["WeakCoercer"]

_LIST_ORIGINS = frozenset(
    {
        list,
        set,
        frozenset,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.MutableSet,
        collections.abc.Iterable,
        collections.abc.Collection,
    }
)
_DICT_ORIGINS = frozenset(
    {dict, collections.abc.Mapping, collections.abc.MutableMapping}
)
_SCALAR_TYPES = (str, int, float, bool)


def _strip(annotation: Any) -> Any:
    """Remove ``Annotated`` metadata and a single ``Optional`` layer."""
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    if get_origin(annotation) in (Union, types.UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return _strip(members[0])
    return annotation


def _is_class(annotation: Any) -> bool:
    """True for plain classes, False for parametrized generics like list[int]."""
    return isinstance(annotation, type) and get_origin(annotation) is None


def _merge_objects(items: list[Any]) -> Any:
    """Merge a non-empty list of dicts into one dict; later keys win."""
    if not items or not all(isinstance(item, dict) for item in items):
        return items
    merged: dict[str, Any] = {}
    for item in items:
        merged.update(item)
    return merged


@dataclass
class WeakCoercer:
    """Applies weak, shape-driven conversions ahead of pydantic validation.

    Example::

        class Query(BaseModel):
            names: list[str]
            page: int = 0

        WeakCoercer().coerce({"names": "John", "page": ""}, Query)
        # {"names": ["John"], "page": 0}
    """

    config: DecoderConfig = field(default_factory=DecoderConfig)

    def coerce(self, data: Any, annotation: Any) -> Any:
        """Return *data* reshaped towards *annotation*. Never raises."""
        annotation = _strip(annotation)
        origin = get_origin(annotation) or annotation

        if _is_class(annotation) and issubclass(annotation, BaseModel):
            return self._coerce_model(data, annotation)

        if _is_class(annotation) and dataclasses.is_dataclass(annotation):
            return self._coerce_dataclass(data, annotation)

        if origin in _LIST_ORIGINS or (
            origin is tuple and self._is_variadic(annotation)
        ):
            return self._coerce_list(data, annotation)

        if origin in _DICT_ORIGINS:
            return self._coerce_dict(data, annotation)

        if annotation in _SCALAR_TYPES:
            return self._coerce_scalar(data, annotation)

        return data

    # ------------------------------------------------------------------
    # Composite targets
    # ------------------------------------------------------------------

    def _coerce_model(self, data: Any, model: type[BaseModel]) -> Any:
        if isinstance(data, list):
            data = _merge_objects(data)
        if not isinstance(data, dict):
            return data

        result = dict(data)
        for name, info in model.model_fields.items():
            key = info.alias if self.config.by_alias and info.alias else name
            if key in result:
                result[key] = self.coerce(result[key], info.annotation)
        return result

    def _coerce_dataclass(self, data: Any, cls: type) -> Any:
        if isinstance(data, list):
            data = _merge_objects(data)
        if not isinstance(data, dict):
            return data

        hints = get_type_hints(cls, include_extras=True)
        result = dict(data)
        for item in dataclasses.fields(cls):
            if item.name in result:
                annotation = hints.get(item.name, Any)
                result[item.name] = self.coerce(result[item.name], annotation)
        return result

    def _coerce_list(self, data: Any, annotation: Any) -> Any:
        if data == {}:
            return []
        if isinstance(data, (str, dict)):
            data = [data]
        if not isinstance(data, list):
            return data

        args = get_args(annotation)
        item_type = args[0] if args else Any
        return [self.coerce(item, item_type) for item in data]

    def _coerce_dict(self, data: Any, annotation: Any) -> Any:
        if data == []:
            return {}
        if isinstance(data, list):
            data = _merge_objects(data)
        if not isinstance(data, dict):
            return data

        args = get_args(annotation)
        value_type = args[1] if len(args) == 2 else Any
        return {key: self.coerce(value, value_type) for key, value in data.items()}

    @staticmethod
    def _is_variadic(annotation: Any) -> bool:
        args = get_args(annotation)
        return not args or (len(args) == 2 and args[1] is Ellipsis)

    # ------------------------------------------------------------------
    # Scalar targets
    # ------------------------------------------------------------------

    def _coerce_scalar(self, data: Any, annotation: type) -> Any:
        if isinstance(data, list) and len(data) == 1:
            data = data[0]

        if (
            self.config.empty_string_as_zero
            and data == ""
            and annotation in (int, float)
        ):
            return annotation(0)

        return data
