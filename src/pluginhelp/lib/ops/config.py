"""Configuration inspection operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pluginhelp.lib.config._paths import config_path, resolve_repo_root
from pluginhelp.lib.config.settings import HelpConfig, load_config
from pluginhelp.lib.formatting import join_lines
from pluginhelp.lib.ops._common import build_formatter, optional_path
from pluginhelp.lib.ops.registry import OperationSpec, operation

if TYPE_CHECKING:
    from pluginhelp.lib.formatting import FormatContext


@dataclass(frozen=True, slots=True)
class ConfigShowInput:
    repo_root: str | None = None


@dataclass(frozen=True, slots=True)
class ConfigShowOutput:
    config: HelpConfig
    path: str
    exists: bool

    def format_text(self, ctx: FormatContext | None = None) -> str:
        formatter = build_formatter(self.config)
        source = self.path if self.exists else f"{self.path} (not found, using defaults)"
        lines = formatter.key_value("Config file", source)
        lines += formatter.key_value("Line length", str(self.config.line_length))
        lines += formatter.key_value("Indent size", str(self.config.indent_size))
        lines += formatter.paragraph("Detail hint", self.config.detail_hint)
        lines += formatter.key_value("Header title", self.config.header_title)
        lines += formatter.key_value("Header URL", self.config.header_url)
        return join_lines(lines, ctx)


def config_show_sync(payload: ConfigShowInput) -> ConfigShowOutput:
    repo_root = resolve_repo_root(optional_path(payload.repo_root))
    path = config_path(repo_root)
    return ConfigShowOutput(
        config=load_config(repo_root),
        path=path.as_posix(),
        exists=path.is_file(),
    )


async def config_show(payload: ConfigShowInput) -> ConfigShowOutput:
    return config_show_sync(payload)


operation(
    OperationSpec[ConfigShowInput, ConfigShowOutput](
        name="config.show",
        handler=config_show,
        sync_handler=config_show_sync,
        input_type=ConfigShowInput,
        output_type=ConfigShowOutput,
        cli_group="config",
        cli_name="show",
        mcp_name="config_show",
        description="Show resolved formatting configuration.",
    )
)
