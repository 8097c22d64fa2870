"""Every registered operation is reachable from both the CLI and the MCP server."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from pluginhelp.cli.main import get_registered_cli_commands, get_registered_cli_descriptions
from pluginhelp.lib.ops.registry import OperationSpec, get_all_operations, get_operation, operation
from pluginhelp.server.main import get_registered_mcp_descriptions, get_registered_mcp_tools


@dataclass(frozen=True, slots=True)
class _NoInput:
    pass


@dataclass(frozen=True, slots=True)
class _NoOutput:
    def format_text(self, ctx: object = None) -> str:
        return ""


async def _noop(_: _NoInput) -> _NoOutput:
    return _NoOutput()


def _noop_sync(_: _NoInput) -> _NoOutput:
    return _NoOutput()


def _spec(name: str, **flags: bool) -> OperationSpec[_NoInput, _NoOutput]:
    return OperationSpec[_NoInput, _NoOutput](
        name=name,
        handler=_noop,
        sync_handler=_noop_sync,
        input_type=_NoInput,
        output_type=_NoOutput,
        cli_group="text",
        cli_name="noop",
        mcp_name="text_noop",
        description="noop",
        **flags,
    )


def test_registry_contains_every_operation() -> None:
    assert [op.name for op in get_all_operations()] == [
        "config.show",
        "describe.phase",
        "describe.plugin",
        "effective.format",
        "text.reflow",
    ]
    assert get_operation("text.reflow").mcp_name == "text_reflow"


def test_every_operation_has_both_surfaces() -> None:
    cli_commands = get_registered_cli_commands()
    mcp_tools = get_registered_mcp_tools()

    for op in get_all_operations():
        if not op.cli_only:
            assert op.mcp_name in mcp_tools, f"{op.name} missing MCP tool"
        if not op.mcp_only:
            assert f"{op.cli_group}.{op.cli_name}" in cli_commands, f"{op.name} missing CLI command"


def test_cli_help_matches_mcp_description() -> None:
    cli_descriptions = get_registered_cli_descriptions()
    mcp_descriptions = get_registered_mcp_descriptions()

    for op in get_all_operations():
        assert cli_descriptions[op.name] == mcp_descriptions[op.name] == op.description


def test_duplicate_operation_name_guard() -> None:
    with pytest.raises(ValueError, match="Duplicate operation name"):
        operation(_spec("text.reflow"))


def test_cli_only_and_mcp_only_are_exclusive() -> None:
    with pytest.raises(ValueError, match="cannot be both cli_only and mcp_only"):
        operation(_spec("text.noop", cli_only=True, mcp_only=True))
