"""Core pluginhelp library exports."""

from pluginhelp.lib.errors import (
    DescribeError,
    IndentOverflowError,
    InvalidArgumentError,
    ReflowError,
)
from pluginhelp.lib.reflow import (
    TextReflowFormatter,
    reflow,
    render_key_value,
    render_paragraph,
    render_plain,
)

__all__ = [
    "DescribeError",
    "IndentOverflowError",
    "InvalidArgumentError",
    "ReflowError",
    "TextReflowFormatter",
    "reflow",
    "render_key_value",
    "render_paragraph",
    "render_plain",
]
