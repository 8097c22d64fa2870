"""CLI command handlers for effective.* operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter

from pluginhelp.cli._registration import Emitter, RegisteredCommands, register_group
from pluginhelp.lib.ops.effective import EffectiveFormatInput, effective_format_sync

if TYPE_CHECKING:
    from cyclopts import App


def register_effective_commands(app: App, emit: Emitter) -> RegisteredCommands:
    def cmd_effective_format(
        source: Annotated[str, Parameter(help="XML document to format.")],
        encoding: Annotated[
            str | None,
            Parameter(name="--encoding", help="Encoding named in the XML declaration."),
        ] = None,
        omit_declaration: Annotated[
            bool,
            Parameter(name="--omit-declaration", help="Drop the XML declaration."),
        ] = False,
        header: Annotated[
            bool,
            Parameter(name="--header", help="Prepend the generated-by comment block."),
        ] = True,
        comment: Annotated[
            str | None,
            Parameter(name="--comment", help="Extra framed comment after the header."),
        ] = None,
        output: Annotated[
            str | None,
            Parameter(name="--output", help="Write the document to this file."),
        ] = None,
        force_stdout: Annotated[
            bool,
            Parameter(name="--force-stdout", help="Also print when writing to --output."),
        ] = False,
    ) -> None:
        emit(
            effective_format_sync(
                EffectiveFormatInput(
                    source=source,
                    encoding=encoding,
                    omit_declaration=omit_declaration,
                    header=header,
                    comment=comment,
                    output=output,
                    force_stdout=force_stdout,
                )
            )
        )

    return register_group(app, "effective", {"effective.format": cmd_effective_format})
