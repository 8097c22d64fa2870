"""Operation registry shared by the CLI and MCP surfaces.

Each operation module calls `operation()` at import time. The registry imports
those modules on first lookup, so importing this module stays cheap.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")

_OPERATION_MODULES = (
    "pluginhelp.lib.ops.config",
    "pluginhelp.lib.ops.describe",
    "pluginhelp.lib.ops.effective",
    "pluginhelp.lib.ops.text",
)


@dataclass(frozen=True, slots=True)
class OperationSpec(Generic[InputT, OutputT]):
    """One operation: its handlers, payload types, and names on each surface."""

    name: str
    handler: Callable[[InputT], Coroutine[Any, Any, OutputT]]
    sync_handler: Callable[[InputT], OutputT]
    input_type: type[InputT]
    output_type: type[OutputT]
    cli_group: str
    cli_name: str
    mcp_name: str
    description: str
    cli_only: bool = False
    mcp_only: bool = False

    def __post_init__(self) -> None:
        if self.cli_only and self.mcp_only:
            raise ValueError(f"Operation '{self.name}' cannot be both cli_only and mcp_only")

    @property
    def cli_command(self) -> str:
        return f"{self.cli_group}.{self.cli_name}"


class _Registry:
    def __init__(self) -> None:
        self._specs: dict[str, OperationSpec[Any, Any]] = {}
        self._loaded = False

    def add(self, spec: OperationSpec[Any, Any]) -> None:
        existing = self._specs.get(spec.name)
        if existing is not None:
            raise ValueError(
                f"Duplicate operation name '{spec.name}' "
                f"(first registered from {existing.handler.__module__})"
            )
        self._specs[spec.name] = spec

    def specs(self) -> dict[str, OperationSpec[Any, Any]]:
        if not self._loaded:
            for module in _OPERATION_MODULES:
                importlib.import_module(module)
            # Set only after every import succeeded; a failed import retries next time.
            self._loaded = True
        return self._specs


_registry = _Registry()


def operation(spec: OperationSpec[InputT, OutputT]) -> OperationSpec[InputT, OutputT]:
    """Register ``spec``; operation names are unique."""

    _registry.add(spec)
    return spec


def get_all_operations() -> list[OperationSpec[Any, Any]]:
    """Registered operations ordered by name."""

    specs = _registry.specs()
    return [specs[name] for name in sorted(specs)]


def get_operation(name: str) -> OperationSpec[Any, Any]:
    specs = _registry.specs()
    if name not in specs:
        raise KeyError(f"Unknown operation '{name}'")
    return specs[name]
