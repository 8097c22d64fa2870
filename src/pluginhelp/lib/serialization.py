"""Serialization helpers for JSON and porcelain output."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from pathlib import PurePath
from typing import Any, cast


def to_jsonable(value: Any) -> Any:
    """Convert report records to JSON-serializable payloads.

    Dataclasses are walked field by field so that nested descriptor tuples
    become lists; ``None`` is kept so consumers can tell "unset" from "empty".
    """

    if is_dataclass(value) and not isinstance(value, type):
        return {field.name: to_jsonable(getattr(value, field.name)) for field in fields(value)}
    if isinstance(value, PurePath):
        return value.as_posix()
    if isinstance(value, Mapping):
        typed_mapping = cast("Mapping[object, object]", value)
        return {str(key): to_jsonable(item) for key, item in typed_mapping.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        typed_seq = cast("list[object] | tuple[object, ...]", value)
        return [to_jsonable(item) for item in typed_seq]
    return value
