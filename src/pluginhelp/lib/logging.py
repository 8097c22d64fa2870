"""Structlog configuration helpers."""

from __future__ import annotations

import logging as std_logging
import sys

import structlog

_LEVELS_BY_VERBOSITY: dict[int, int] = {
    -1: std_logging.ERROR,
    0: std_logging.WARNING,
    1: std_logging.INFO,
}


def level_from_verbosity(verbosity: int) -> int:
    """Map `-q` / default / `-v` / `-vv` to a logging level."""

    if verbosity < -1:
        verbosity = -1
    return _LEVELS_BY_VERBOSITY.get(verbosity, std_logging.DEBUG)


def configure_logging(json_mode: bool = False, verbosity: int = 0) -> None:
    """Configure structlog for CLI or MCP server mode.

    Help text is the product on stdout, so both stdlib and structlog output are
    routed to stderr.
    """

    level = level_from_verbosity(verbosity)
    handler = std_logging.StreamHandler(sys.stderr)
    handler.setFormatter(std_logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    std_logging.basicConfig(level=level, handlers=[handler], force=True)

    renderer: structlog.typing.Processor = (
        structlog.processors.JSONRenderer()
        if json_mode
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
