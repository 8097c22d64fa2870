"""Repository-level formatting config loader.

Settings come from `<repo>/.pluginhelp/config.toml` and may be overridden with
`PLUGINHELP_*` environment variables:

```toml
[format]
line_length = 80     # alias: width
indent_size = 2

[describe]
detail_hint = "For more information, run 'pluginhelp describe [...] --detail'"

[effective]
header_title = "Generated by pluginhelp"
header_url = "https://example.org/build"
```
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import cast

from pluginhelp.lib.config._paths import config_path, resolve_repo_root
from pluginhelp.lib.reflow import DEFAULT_INDENT_SIZE, DEFAULT_LINE_LENGTH

logger = logging.getLogger(__name__)

DEFAULT_DETAIL_HINT = "For more information, run 'pluginhelp describe [...] --detail'"
DEFAULT_HEADER_TITLE = "Generated by pluginhelp"


@dataclass(frozen=True, slots=True)
class HelpConfig:
    """Resolved formatting configuration for pluginhelp."""

    line_length: int = DEFAULT_LINE_LENGTH
    indent_size: int = DEFAULT_INDENT_SIZE
    detail_hint: str = DEFAULT_DETAIL_HINT
    header_title: str = DEFAULT_HEADER_TITLE
    header_url: str | None = None


@dataclass(frozen=True, slots=True)
class _Setting:
    field: str
    kind: type
    env: str


_SETTINGS: dict[tuple[str, str], _Setting] = {
    ("format", "line_length"): _Setting("line_length", int, "PLUGINHELP_LINE_LENGTH"),
    ("format", "width"): _Setting("line_length", int, "PLUGINHELP_LINE_LENGTH"),
    ("format", "indent_size"): _Setting("indent_size", int, "PLUGINHELP_INDENT_SIZE"),
    ("describe", "detail_hint"): _Setting("detail_hint", str, "PLUGINHELP_DETAIL_HINT"),
    ("effective", "header_title"): _Setting("header_title", str, "PLUGINHELP_HEADER_TITLE"),
    ("effective", "header_url"): _Setting("header_url", str, "PLUGINHELP_HEADER_URL"),
}
_SECTIONS = frozenset(section for section, _ in _SETTINGS)


def _invalid(source: str, expected: str, raw: object) -> ValueError:
    return ValueError(
        f"Invalid value for '{source}': expected {expected}, got {type(raw).__name__} ({raw!r})."
    )


def _from_file(setting: _Setting, raw: object, source: str) -> object:
    if setting.kind is int:
        # TOML booleans are ints to Python.
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise _invalid(source, "int", raw)
        return raw
    if not isinstance(raw, str):
        raise _invalid(source, "str", raw)
    text = raw.strip()
    if not text:
        raise ValueError(f"Invalid value for '{source}': expected non-empty string.")
    return text


def _from_env(setting: _Setting, raw: str) -> object:
    text = raw.strip()
    if setting.kind is int:
        try:
            return int(text)
        except ValueError:
            raise ValueError(
                f"Invalid environment override '{setting.env}': expected int, got {raw!r}."
            ) from None
    if not text:
        raise ValueError(
            f"Invalid environment override '{setting.env}': expected non-empty string."
        )
    return text


def _read_file(path: Path) -> dict[str, object]:
    payload = cast("dict[str, object]", tomllib.loads(path.read_text(encoding="utf-8")))
    values: dict[str, object] = {}
    for section, table in payload.items():
        if section not in _SECTIONS:
            logger.warning("Ignoring unknown pluginhelp config key '%s'.", section)
            continue
        if not isinstance(table, dict):
            raise ValueError(f"Invalid value for '{section}' in '{path}': expected table.")
        for key, raw in cast("dict[str, object]", table).items():
            setting = _SETTINGS.get((section, key))
            if setting is None:
                logger.warning("Ignoring unknown pluginhelp config key '%s.%s'.", section, key)
                continue
            values[setting.field] = _from_file(setting, raw, f"{section}.{key}")
    return values


def _read_env() -> dict[str, object]:
    values: dict[str, object] = {}
    for setting in {item.env: item for item in _SETTINGS.values()}.values():
        raw = os.getenv(setting.env)
        if raw is not None:
            values[setting.field] = _from_env(setting, raw)
    return values


def _validate(config: HelpConfig) -> HelpConfig:
    if config.indent_size < 0:
        raise ValueError(f"Invalid indent_size: expected >= 0, got {config.indent_size}.")
    # Paragraph entries wrap their first line at line_length - indent_size.
    if config.line_length <= config.indent_size:
        raise ValueError(
            f"Invalid line_length: expected > indent_size ({config.indent_size}), "
            f"got {config.line_length}."
        )
    return config


def load_config(repo_root: Path | None = None) -> HelpConfig:
    """Load `.pluginhelp/config.toml` and apply environment overrides."""

    path = config_path(resolve_repo_root(repo_root))
    values = _read_file(path) if path.is_file() else {}
    values.update(_read_env())
    return _validate(replace(HelpConfig(), **values))  # type: ignore[arg-type]
