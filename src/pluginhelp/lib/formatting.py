"""Text rendering protocol for operation results.

Report code in lib/ and the CLI in cli/ both use it, so it lives here rather
than in the CLI package.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class FormatContext:
    verbosity: int = 0
    line_separator: str = "\n"


@runtime_checkable
class TextFormattable(Protocol):
    """A result that knows how to print itself for humans."""

    def format_text(self, ctx: FormatContext | None = None) -> str: ...


def join_lines(lines: list[str] | tuple[str, ...], ctx: FormatContext | None = None) -> str:
    """Join logical display lines with the context's line separator."""

    separator = (ctx or FormatContext()).line_separator
    return separator.join(lines)
