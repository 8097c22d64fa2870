"""Cyclopts CLI entry point for pluginhelp."""

from __future__ import annotations

import sys
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Annotated

import structlog
from cyclopts import App, Parameter

from pluginhelp import __version__
from pluginhelp.cli._registration import RegisteredCommands
from pluginhelp.cli.config_cmd import register_config_commands
from pluginhelp.cli.describe_cmd import register_describe_commands
from pluginhelp.cli.effective_cmd import register_effective_commands
from pluginhelp.cli.output import OutputConfig, normalize_output_format
from pluginhelp.cli.output import emit as emit_output
from pluginhelp.cli.text_cmd import register_text_commands

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CliSettings:
    """Flags accepted anywhere on the command line."""

    output: OutputConfig = field(default_factory=lambda: OutputConfig(format="text"))
    verbosity: int = 0


_SETTINGS: ContextVar[CliSettings] = ContextVar("pluginhelp_cli_settings", default=CliSettings())

_MODE_FLAGS = {"--json": "json", "--porcelain": "porcelain"}
_NEGATED_MODE_FLAGS = frozenset({"--no-json", "--no-porcelain"})
_VERBOSITY_STEPS = {"-v": 1, "--verbose": 1, "-vv": 2}
_QUIET_FLAGS = frozenset({"-q", "--quiet"})


def current_settings() -> CliSettings:
    return _SETTINGS.get()


def emit(payload: object) -> None:
    """Print ``payload`` in the output mode chosen on the command line."""

    emit_output(payload, current_settings().output)


def split_global_flags(argv: Sequence[str]) -> tuple[list[str], CliSettings]:
    """Pull output and verbosity flags out of ``argv``.

    They may appear before or after the subcommand; everything after ``--`` is
    passed through untouched.
    """

    remaining: list[str] = []
    modes: set[str] = set()
    requested: str | None = None
    verbosity = 0

    args = iter(argv)
    for arg in args:
        if arg == "--":
            remaining.append(arg)
            remaining.extend(args)
            break
        name, has_value, value = arg.partition("=")
        if name == "--format":
            requested = value if has_value else next(args, None)
            if requested is None:
                raise SystemExit("--format requires a value")
        elif arg in _MODE_FLAGS:
            modes.add(_MODE_FLAGS[arg])
        elif arg in _NEGATED_MODE_FLAGS:
            continue
        elif arg in _VERBOSITY_STEPS:
            verbosity += _VERBOSITY_STEPS[arg]
        elif arg in _QUIET_FLAGS:
            verbosity = -1
        else:
            remaining.append(arg)

    output_format = normalize_output_format(
        requested=requested,
        json_mode="json" in modes,
        porcelain_mode="porcelain" in modes,
    )
    return remaining, CliSettings(output=OutputConfig(format=output_format), verbosity=verbosity)


app = App(
    name="pluginhelp",
    help="Describe build plugins, goals, and lifecycle phases as wrapped text.",
    version=__version__,
    help_formatter="plain",
)


@app.default
def root(
    json_mode: Annotated[
        bool,
        Parameter(name="--json", help="Print results as JSON."),
    ] = False,
    output_format: Annotated[
        str | None,
        Parameter(name="--format", help="Output mode: text, json, or porcelain."),
    ] = None,
    porcelain: Annotated[
        bool,
        Parameter(name="--porcelain", help="Print tab-separated key/value lines."),
    ] = False,
) -> None:
    """Show help.

    The output flags are consumed before dispatch; they are declared here so
    they show up in `--help`.
    """

    app.help_print()


@app.command(name="serve")
def serve() -> None:
    """Start the MCP server on stdio."""

    from pluginhelp.server.main import run_server

    run_server()


_GROUPS = (
    ("text", "Text wrapping commands", register_text_commands),
    ("describe", "Plugin, goal, and phase descriptions", register_describe_commands),
    ("effective", "Effective document formatting", register_effective_commands),
    ("config", "Formatting config commands", register_config_commands),
)


def _register_groups() -> RegisteredCommands:
    registered = RegisteredCommands()
    for name, help_text, register in _GROUPS:
        group_app = App(name=name, help=help_text, help_formatter="plain")
        app.command(group_app, name=name)
        registered.update(register(group_app, emit))
    return registered


_REGISTERED = _register_groups()


def get_registered_cli_commands() -> set[str]:
    """`group.command` names bound on the CLI."""

    return set(_REGISTERED.commands)


def get_registered_cli_descriptions() -> dict[str, str]:
    return dict(_REGISTERED.descriptions)


def _failure_message(exc: Exception) -> str:
    # KeyError's str() is the repr of its argument.
    text = str(exc.args[0]) if isinstance(exc, KeyError) and exc.args else str(exc).strip()
    return text or type(exc).__name__


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for `pluginhelp` and `python -m pluginhelp`."""

    from pluginhelp.lib.logging import configure_logging

    args, settings = split_global_flags(sys.argv[1:] if argv is None else argv)
    configure_logging(json_mode=settings.output.format == "json", verbosity=settings.verbosity)

    token = _SETTINGS.set(settings)
    try:
        app(args)
    except (KeyError, ValueError, OSError) as exc:
        logger.debug("Command failed.", exc_info=True)
        print(f"error: {_failure_message(exc)}", file=sys.stderr)
        raise SystemExit(1) from None
    finally:
        _SETTINGS.reset(token)
