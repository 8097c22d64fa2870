"""Render operation results as text, JSON, or porcelain lines."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Literal, cast, get_args

from pluginhelp.lib.formatting import FormatContext, TextFormattable
from pluginhelp.lib.serialization import to_jsonable

OutputFormat = Literal["text", "json", "porcelain"]

_FORMATS: frozenset[str] = frozenset(get_args(OutputFormat))


@dataclass(frozen=True, slots=True)
class OutputConfig:
    format: OutputFormat
    context: FormatContext = FormatContext()


def normalize_output_format(
    *,
    requested: str | None,
    json_mode: bool,
    porcelain_mode: bool,
) -> OutputFormat:
    """`--json` wins over `--porcelain`, which wins over `--format`; text by default."""

    if json_mode:
        return "json"
    if porcelain_mode:
        return "porcelain"
    choice = (requested or "").strip().lower() or "text"
    if choice not in _FORMATS:
        raise SystemExit("--format must be one of: text, json, porcelain")
    return cast("OutputFormat", choice)


def _scalar(value: object) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, sort_keys=True)
    return str(value)


def porcelain_lines(payload: object) -> list[str]:
    """Tab-separated ``key<TAB>value`` lines.

    A list of strings becomes one line per item under the same key, so each
    rendered help line stays greppable.
    """

    if isinstance(payload, list):
        return [_scalar(item) for item in cast("list[object]", payload)]
    if not isinstance(payload, dict):
        return [_scalar(payload)]

    lines: list[str] = []
    for key, value in sorted(cast("dict[str, object]", payload).items()):
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            lines.extend(f"{key}\t{item}" for item in cast("list[str]", value))
        else:
            lines.append(f"{key}\t{_scalar(value)}")
    return lines


def render(value: Any, config: OutputConfig) -> str:
    """Render one result in the configured mode."""

    if config.format == "text" and isinstance(value, TextFormattable):
        return value.format_text(config.context)
    payload = to_jsonable(value)
    if config.format == "porcelain":
        return "\n".join(porcelain_lines(payload))
    indent = 2 if config.format == "text" else None
    return json.dumps(payload, sort_keys=True, indent=indent)


def emit(value: Any, config: OutputConfig) -> None:
    print(render(value, config))
