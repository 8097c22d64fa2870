"""Turn untyped MCP tool arguments into operation input dataclasses."""

from __future__ import annotations

import dataclasses
import inspect
import types
from collections.abc import Mapping
from typing import Any, TypeVar, Union, cast, get_args, get_origin, get_type_hints

InputT = TypeVar("InputT")

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_OPTIONAL_ORIGINS = (types.UnionType, Union)


def unwrap_optional(annotation: Any) -> Any:
    """Return ``T`` for ``T | None``; any other annotation is returned as is."""

    if get_origin(annotation) not in _OPTIONAL_ORIGINS:
        return annotation
    members = [arg for arg in get_args(annotation) if arg is not type(None)]
    return members[0] if len(members) == 1 else annotation


def coerce_scalar(annotation: Any, value: object) -> object:
    """Convert JSON-ish scalars (often strings) to the annotated type."""

    target = unwrap_optional(annotation)
    if value is None:
        return None
    if target is bool:
        return value.strip().lower() in _TRUE_WORDS if isinstance(value, str) else bool(value)
    if target in (str, int, float):
        return target(cast("Any", value))
    return value


def _coerce_value(annotation: Any, value: object) -> object:
    target = unwrap_optional(annotation)
    if get_origin(target) is tuple and isinstance(value, (list, tuple)):
        item_type = get_args(target)[0] if get_args(target) else Any
        return tuple(coerce_scalar(item_type, item) for item in cast("list[object]", value))
    return coerce_scalar(annotation, value)


def _default_of(field: dataclasses.Field[Any]) -> object:
    if field.default is not dataclasses.MISSING:
        return field.default
    if field.default_factory is not dataclasses.MISSING:
        return field.default_factory()
    return inspect.Parameter.empty


def coerce_input_payload(input_type: type[InputT], arguments: object) -> InputT:
    """Build ``input_type`` from tool arguments, filling dataclass defaults."""

    if not dataclasses.is_dataclass(input_type):
        return input_type()
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise TypeError(f"Tool input must be an object, got {type(arguments).__name__}")
    provided = cast("Mapping[str, object]", arguments)

    hints = get_type_hints(input_type)
    values: dict[str, object] = {}
    for field in dataclasses.fields(input_type):
        if field.name in provided:
            annotation = hints.get(field.name, field.type)
            values[field.name] = _coerce_value(annotation, provided[field.name])
            continue
        default = _default_of(field)
        if default is inspect.Parameter.empty:
            raise TypeError(f"Missing required field '{field.name}'")
        values[field.name] = default
    return cast("InputT", input_type(**values))


def signature_from_dataclass(input_type: type[object]) -> inspect.Signature:
    """Keyword-only signature mirroring the dataclass; FastMCP derives tool schemas from it."""

    if not dataclasses.is_dataclass(input_type):
        return inspect.Signature()
    hints = get_type_hints(input_type, include_extras=True)
    return inspect.Signature(
        [
            inspect.Parameter(
                field.name,
                inspect.Parameter.KEYWORD_ONLY,
                default=_default_of(field),
                annotation=hints.get(field.name, field.type),
            )
            for field in dataclasses.fields(input_type)
        ]
    )
