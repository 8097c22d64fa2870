"""Describe operations: plugins, goals, and lifecycle phases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pluginhelp.lib.describe import DescribeRequest, DescribeWriter
from pluginhelp.lib.descriptors import load_catalog
from pluginhelp.lib.errors import DescribeError
from pluginhelp.lib.formatting import join_lines
from pluginhelp.lib.ops._common import build_formatter, optional_path, resolve_config
from pluginhelp.lib.ops.registry import OperationSpec, operation
from pluginhelp.lib.sink import write_text_output

if TYPE_CHECKING:
    from pluginhelp.lib.descriptors import DescriptorCatalog
    from pluginhelp.lib.formatting import FormatContext


@dataclass(frozen=True, slots=True)
class DescribePluginInput:
    descriptors: str = ""
    plugin: str | None = None
    group_id: str | None = None
    artifact_id: str | None = None
    version: str | None = None
    goal: str | None = None
    cmd: str | None = None
    detail: bool = False
    minimal: bool = False
    output: str | None = None
    force_stdout: bool = False
    repo_root: str | None = None


@dataclass(frozen=True, slots=True)
class DescribePhaseInput:
    descriptors: str = ""
    phase: str = ""
    output: str | None = None
    force_stdout: bool = False
    repo_root: str | None = None


@dataclass(frozen=True, slots=True)
class DescribeOutput:
    lines: tuple[str, ...]
    output_path: str | None = None
    force_stdout: bool = False

    def format_text(self, ctx: FormatContext | None = None) -> str:
        """Full description, or a pointer to the file it was written to."""
        if self.output_path is None or self.force_stdout:
            return join_lines(self.lines, ctx)
        return f"Wrote descriptions to: {self.output_path}"


def _catalog(descriptors: str) -> DescriptorCatalog:
    path = optional_path(descriptors)
    if path is None:
        raise DescribeError("A descriptor file is required (--descriptors).")
    return load_catalog(path)


def _finish(lines: list[str], output: str | None, force_stdout: bool) -> DescribeOutput:
    destination = optional_path(output)
    if destination is None:
        return DescribeOutput(lines=tuple(lines))
    written = write_text_output("\n".join(lines), destination)
    return DescribeOutput(
        lines=tuple(lines),
        output_path=written.as_posix(),
        force_stdout=force_stdout,
    )


def describe_plugin_sync(payload: DescribePluginInput) -> DescribeOutput:
    config = resolve_config(payload.repo_root)
    writer = DescribeWriter(
        formatter=build_formatter(config),
        detail=payload.detail,
        minimal=payload.minimal,
        detail_hint=config.detail_hint,
    )
    request = DescribeRequest(
        plugin=payload.plugin,
        group_id=payload.group_id,
        artifact_id=payload.artifact_id,
        version=payload.version,
        goal=payload.goal,
        cmd=payload.cmd,
    )
    lines = writer.describe(_catalog(payload.descriptors), request)
    return _finish(lines, payload.output, payload.force_stdout)


def describe_phase_sync(payload: DescribePhaseInput) -> DescribeOutput:
    phase = payload.phase.strip()
    if not phase:
        raise DescribeError("Phase name must not be empty.")
    if ":" in phase:
        raise DescribeError(f"'{phase}' looks like a goal; use `describe plugin --cmd` instead.")
    config = resolve_config(payload.repo_root)
    writer = DescribeWriter(formatter=build_formatter(config), detail_hint=config.detail_hint)
    lines = writer.describe_phase(phase, _catalog(payload.descriptors))
    return _finish(lines, payload.output, payload.force_stdout)


async def describe_plugin(payload: DescribePluginInput) -> DescribeOutput:
    return describe_plugin_sync(payload)


async def describe_phase(payload: DescribePhaseInput) -> DescribeOutput:
    return describe_phase_sync(payload)


operation(
    OperationSpec[DescribePluginInput, DescribeOutput](
        name="describe.plugin",
        handler=describe_plugin,
        sync_handler=describe_plugin_sync,
        input_type=DescribePluginInput,
        output_type=DescribeOutput,
        cli_group="describe",
        cli_name="plugin",
        mcp_name="describe_plugin",
        description="Describe a plugin, one of its goals, or a command.",
    )
)

operation(
    OperationSpec[DescribePhaseInput, DescribeOutput](
        name="describe.phase",
        handler=describe_phase,
        sync_handler=describe_phase_sync,
        input_type=DescribePhaseInput,
        output_type=DescribeOutput,
        cli_group="describe",
        cli_name="phase",
        mcp_name="describe_phase",
        description="Describe a lifecycle phase and its goal bindings.",
    )
)
