"""Text reflow operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, cast

from pluginhelp.lib.errors import InvalidArgumentError
from pluginhelp.lib.formatting import join_lines
from pluginhelp.lib.ops._common import build_formatter, resolve_config
from pluginhelp.lib.ops.registry import OperationSpec, operation

if TYPE_CHECKING:
    from pluginhelp.lib.formatting import FormatContext

ReflowStyle = Literal["plain", "key-value", "paragraph"]
_STYLES = frozenset({"plain", "key-value", "paragraph"})


@dataclass(frozen=True, slots=True)
class TextReflowInput:
    text: str = ""
    key: str | None = None
    style: str = "plain"
    indent_level: int = 0
    indent_size: int | None = None
    line_length: int | None = None
    repo_root: str | None = None


@dataclass(frozen=True, slots=True)
class TextReflowOutput:
    lines: tuple[str, ...]
    style: ReflowStyle = "plain"

    def format_text(self, ctx: FormatContext | None = None) -> str:
        return join_lines(self.lines, ctx)


def _normalize_style(style: str) -> ReflowStyle:
    normalized = style.strip().lower().replace("_", "-")
    if normalized not in _STYLES:
        raise InvalidArgumentError(
            f"Unsupported style '{style}'. Expected one of: {', '.join(sorted(_STYLES))}."
        )
    return cast("ReflowStyle", normalized)


def text_reflow_sync(payload: TextReflowInput) -> TextReflowOutput:
    style = _normalize_style(payload.style)
    formatter = build_formatter(
        resolve_config(payload.repo_root),
        indent_size=payload.indent_size,
        line_length=payload.line_length,
    )
    if style == "key-value":
        lines = formatter.key_value(payload.key or "", payload.text, payload.indent_level)
    elif style == "paragraph":
        lines = formatter.paragraph(payload.key, payload.text, payload.indent_level)
    else:
        if payload.key:
            raise InvalidArgumentError("A key requires the 'key-value' or 'paragraph' style.")
        lines = formatter.reflow(payload.text, payload.indent_level)
    return TextReflowOutput(lines=tuple(lines), style=style)


async def text_reflow(payload: TextReflowInput) -> TextReflowOutput:
    return text_reflow_sync(payload)


operation(
    OperationSpec[TextReflowInput, TextReflowOutput](
        name="text.reflow",
        handler=text_reflow,
        sync_handler=text_reflow_sync,
        input_type=TextReflowInput,
        output_type=TextReflowOutput,
        cli_group="text",
        cli_name="reflow",
        mcp_name="text_reflow",
        description="Wrap text to a fixed width with indentation.",
    )
)
