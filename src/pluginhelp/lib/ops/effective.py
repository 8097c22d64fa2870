"""Effective document formatting operation."""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pluginhelp.lib.effective import pretty_format, read_document, render_effective
from pluginhelp.lib.errors import DescribeError
from pluginhelp.lib.ops._common import optional_path, resolve_config
from pluginhelp.lib.ops.registry import OperationSpec, operation
from pluginhelp.lib.sink import write_text_output

if TYPE_CHECKING:
    from pluginhelp.lib.formatting import FormatContext


@dataclass(frozen=True, slots=True)
class EffectiveFormatInput:
    source: str = ""
    encoding: str | None = None
    omit_declaration: bool = False
    header: bool = True
    comment: str | None = None
    output: str | None = None
    force_stdout: bool = False
    repo_root: str | None = None


@dataclass(frozen=True, slots=True)
class EffectiveFormatOutput:
    text: str
    output_path: str | None = None
    force_stdout: bool = False

    def format_text(self, ctx: FormatContext | None = None) -> str:
        if self.output_path is None or self.force_stdout:
            return self.text.rstrip("\n")
        return f"Effective document written to: {self.output_path}"


def effective_format_sync(payload: EffectiveFormatInput) -> EffectiveFormatOutput:
    source = optional_path(payload.source)
    if source is None:
        raise DescribeError("A source XML file is required.")
    if not source.is_file():
        raise FileNotFoundError(f"Source XML file not found: {source}")
    document = read_document(source)
    encoding = payload.encoding or "UTF-8"
    try:
        codecs.lookup(encoding)
    except LookupError:
        raise DescribeError(f"Unknown output encoding: '{encoding}'") from None

    if payload.header:
        config = resolve_config(payload.repo_root)
        text = render_effective(
            document,
            title=config.header_title,
            url=config.header_url,
            comment_text=payload.comment,
            encoding=payload.encoding,
            omit_declaration=payload.omit_declaration,
            width=config.line_length,
        )
    else:
        text = pretty_format(document, payload.encoding, payload.omit_declaration)

    destination = optional_path(payload.output)
    if destination is None:
        return EffectiveFormatOutput(text=text)
    # The declaration names the encoding, so the bytes must match it.
    written = write_text_output(
        text, destination, encoding=encoding, errors="xmlcharrefreplace"
    )
    return EffectiveFormatOutput(
        text=text,
        output_path=written.as_posix(),
        force_stdout=payload.force_stdout,
    )


async def effective_format(payload: EffectiveFormatInput) -> EffectiveFormatOutput:
    return effective_format_sync(payload)


operation(
    OperationSpec[EffectiveFormatInput, EffectiveFormatOutput](
        name="effective.format",
        handler=effective_format,
        sync_handler=effective_format_sync,
        input_type=EffectiveFormatInput,
        output_type=EffectiveFormatOutput,
        cli_group="effective",
        cli_name="format",
        mcp_name="effective_format",
        description="Pretty-print an effective XML document with a generated header.",
    )
)
