"""CLI command handlers for config.* operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pluginhelp.cli._registration import Emitter, RegisteredCommands, register_group
from pluginhelp.lib.ops.config import ConfigShowInput, config_show_sync

if TYPE_CHECKING:
    from cyclopts import App


def register_config_commands(app: App, emit: Emitter) -> RegisteredCommands:
    def cmd_config_show() -> None:
        emit(config_show_sync(ConfigShowInput()))

    return register_group(app, "config", {"config.show": cmd_config_show})
