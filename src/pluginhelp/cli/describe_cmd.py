"""CLI command handlers for describe.* operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter

from pluginhelp.cli._registration import Emitter, RegisteredCommands, register_group
from pluginhelp.lib.ops.describe import (
    DescribePhaseInput,
    DescribePluginInput,
    describe_phase_sync,
    describe_plugin_sync,
)

if TYPE_CHECKING:
    from cyclopts import App

_DESCRIPTORS_HELP = "JSON or TOML file with plugin and lifecycle descriptors."


def register_describe_commands(app: App, emit: Emitter) -> RegisteredCommands:
    def cmd_describe_plugin(
        descriptors: Annotated[str, Parameter(name="--descriptors", help=_DESCRIPTORS_HELP)],
        plugin: Annotated[
            str | None,
            Parameter(
                name=["--plugin", "--prefix"],
                help="Plugin prefix or groupId:artifactId[:version].",
            ),
        ] = None,
        group_id: Annotated[str | None, Parameter(name="--group-id")] = None,
        artifact_id: Annotated[str | None, Parameter(name="--artifact-id")] = None,
        version: Annotated[str | None, Parameter(name="--plugin-version")] = None,
        goal: Annotated[
            str | None,
            Parameter(name="--goal", help="Describe only this goal of the plugin."),
        ] = None,
        cmd: Annotated[
            str | None,
            Parameter(name="--cmd", help="A lifecycle phase or a prefix:goal command."),
        ] = None,
        detail: Annotated[
            bool,
            Parameter(name="--detail", help="Include implementation and parameter details."),
        ] = False,
        minimal: Annotated[
            bool,
            Parameter(name="--minimal", help="Omit the goal list from plugin descriptions."),
        ] = False,
        output: Annotated[
            str | None,
            Parameter(name="--output", help="Write the description to this file."),
        ] = None,
        force_stdout: Annotated[
            bool,
            Parameter(name="--force-stdout", help="Also print when writing to --output."),
        ] = False,
    ) -> None:
        emit(
            describe_plugin_sync(
                DescribePluginInput(
                    descriptors=descriptors,
                    plugin=plugin,
                    group_id=group_id,
                    artifact_id=artifact_id,
                    version=version,
                    goal=goal,
                    cmd=cmd,
                    detail=detail,
                    minimal=minimal,
                    output=output,
                    force_stdout=force_stdout,
                )
            )
        )

    def cmd_describe_phase(
        phase: Annotated[str, Parameter(help="Lifecycle phase name, e.g. 'compile'.")],
        descriptors: Annotated[str, Parameter(name="--descriptors", help=_DESCRIPTORS_HELP)],
        output: Annotated[
            str | None,
            Parameter(name="--output", help="Write the description to this file."),
        ] = None,
        force_stdout: Annotated[
            bool,
            Parameter(name="--force-stdout", help="Also print when writing to --output."),
        ] = False,
    ) -> None:
        emit(
            describe_phase_sync(
                DescribePhaseInput(
                    descriptors=descriptors,
                    phase=phase,
                    output=output,
                    force_stdout=force_stdout,
                )
            )
        )

    return register_group(
        app,
        "describe",
        {
            "describe.plugin": cmd_describe_plugin,
            "describe.phase": cmd_describe_phase,
        },
    )
