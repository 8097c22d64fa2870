"""CLI command handlers for text.* operations."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter

from pluginhelp.cli._registration import Emitter, RegisteredCommands, register_group
from pluginhelp.lib.ops.text import TextReflowInput, text_reflow_sync

if TYPE_CHECKING:
    from cyclopts import App


def _read_text(text: str | None) -> str:
    if text is None:
        return sys.stdin.read()
    return text


def register_text_commands(app: App, emit: Emitter) -> RegisteredCommands:
    def cmd_text_reflow(
        text: Annotated[
            str | None,
            Parameter(help="Text to wrap; read from standard input when omitted."),
        ] = None,
        key: Annotated[
            str | None,
            Parameter(name="--key", help="Label rendered as 'key: text'."),
        ] = None,
        style: Annotated[
            str,
            Parameter(name="--style", help="plain, key-value, or paragraph."),
        ] = "plain",
        indent_level: Annotated[
            int,
            Parameter(name="--indent", help="Indentation level of every line."),
        ] = 0,
        indent_size: Annotated[
            int | None,
            Parameter(name="--indent-size", help="Spaces per indentation level."),
        ] = None,
        line_length: Annotated[
            int | None,
            Parameter(name="--width", help="Maximum line length."),
        ] = None,
    ) -> None:
        emit(
            text_reflow_sync(
                TextReflowInput(
                    text=_read_text(text),
                    key=key,
                    style=style,
                    indent_level=indent_level,
                    indent_size=indent_size,
                    line_length=line_length,
                )
            )
        )

    return register_group(app, "text", {"text.reflow": cmd_text_reflow})
