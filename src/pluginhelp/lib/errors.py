"""Error kinds raised by the formatter and the describe report layer."""

from __future__ import annotations


class ReflowError(ValueError):
    """Text could not be wrapped with the requested parameters."""


class InvalidArgumentError(ReflowError):
    """Missing text, empty key, or a dimension that makes wrapping undefined."""


class IndentOverflowError(ReflowError, ArithmeticError):
    """Indentation width went negative or beyond the 32-bit integer range."""


class DescribeError(ValueError):
    """Plugin, goal, or phase metadata could not be described."""
