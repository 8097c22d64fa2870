"""Helpers shared by operation modules."""

from __future__ import annotations

from pathlib import Path

from pluginhelp.lib.config.settings import HelpConfig, load_config
from pluginhelp.lib.reflow import TextReflowFormatter


def optional_path(value: str | None) -> Path | None:
    if value is None or not value.strip():
        return None
    return Path(value.strip()).expanduser().resolve()


def resolve_config(repo_root: str | None) -> HelpConfig:
    return load_config(optional_path(repo_root))


def build_formatter(
    config: HelpConfig,
    *,
    indent_size: int | None = None,
    line_length: int | None = None,
) -> TextReflowFormatter:
    """Formatter from config, with per-call dimension overrides."""

    return TextReflowFormatter(
        indent_size=config.indent_size if indent_size is None else indent_size,
        line_length=config.line_length if line_length is None else line_length,
    )
