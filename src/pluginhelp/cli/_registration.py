"""Bind registry operations to cyclopts sub-apps."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pluginhelp.lib.ops.registry import get_all_operations

if TYPE_CHECKING:
    from cyclopts import App

Emitter = Callable[[Any], None]


@dataclass(slots=True)
class RegisteredCommands:
    """CLI commands bound so far, keyed for the surface parity checks."""

    commands: set[str] = field(default_factory=set)
    descriptions: dict[str, str] = field(default_factory=dict)

    def update(self, other: RegisteredCommands) -> None:
        self.commands |= other.commands
        self.descriptions.update(other.descriptions)


def register_group(
    app: App, group: str, handlers: Mapping[str, Callable[..., None]]
) -> RegisteredCommands:
    """Attach the handler of each CLI-visible ``group`` operation to ``app``.

    Help text comes from the operation description so the CLI and the MCP tool
    always describe an operation the same way.
    """

    bound = RegisteredCommands()
    for op in get_all_operations():
        if op.cli_group != group or op.mcp_only:
            continue
        try:
            handler = handlers[op.name]
        except KeyError:
            raise ValueError(
                f"Operation '{op.name}' has no CLI handler in group '{group}'"
            ) from None
        app.command(handler, name=op.cli_name, help=op.description)
        bound.commands.add(op.cli_command)
        bound.descriptions[op.name] = op.description
    return bound
