"""Plugin, goal, parameter, and lifecycle metadata records.

The records are plain data supplied by whatever tool resolved the plugins;
nothing here talks to a repository or a build. `load_catalog()` reads them
from a JSON or TOML document.
"""

from __future__ import annotations

import json
import logging
import re
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

from pluginhelp.lib.errors import DescribeError

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])([A-Z])")


@dataclass(frozen=True, slots=True)
class ParameterDescriptor:
    """One configurable goal parameter."""

    name: str
    description: str | None = None
    default_value: str | None = None
    alias: str | None = None
    required: bool = False
    editable: bool = True
    expression: str | None = None
    # None: not deprecated. "": deprecated without a reason.
    deprecated: str | None = None


@dataclass(frozen=True, slots=True)
class MojoDescriptor:
    """One plugin goal."""

    goal: str
    plugin_prefix: str = ""
    description: str | None = None
    deprecated: str | None = None
    implementation: str | None = None
    language: str | None = None
    phase: str | None = None
    execute_goal: str | None = None
    execute_phase: str | None = None
    execute_lifecycle: str | None = None
    report: bool = False
    parameters: tuple[ParameterDescriptor, ...] = ()

    @property
    def full_goal_name(self) -> str:
        if not self.plugin_prefix:
            return self.goal
        return f"{self.plugin_prefix}:{self.goal}"


@dataclass(frozen=True, slots=True)
class PluginDescriptor:
    """Plugin coordinates, display metadata, and its goals."""

    group_id: str
    artifact_id: str
    version: str
    goal_prefix: str = ""
    name: str | None = None
    description: str | None = None
    # None means the descriptor declared no goals at all.
    mojos: tuple[MojoDescriptor, ...] | None = None

    @property
    def id(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    def find_mojo(self, goal: str) -> MojoDescriptor | None:
        for mojo in self.mojos or ():
            if mojo.goal == goal:
                return mojo
        return None


@dataclass(frozen=True, slots=True)
class Lifecycle:
    """A named lifecycle and its ordered phases."""

    id: str
    phases: tuple[str, ...]
    # Phase -> goal bindings for lifecycles that carry their own defaults
    # (clean, site). None for the packaging-driven default lifecycle.
    default_phases: dict[str, str] | None = None


@dataclass(frozen=True, slots=True)
class DescriptorCatalog:
    """Everything the describe report can look up."""

    plugins: tuple[PluginDescriptor, ...] = ()
    lifecycles: tuple[Lifecycle, ...] = ()
    packaging: str = "jar"
    # Phase -> comma-separated goal bindings for the project's packaging.
    packaging_phases: dict[str, str] = field(default_factory=dict)

    def lifecycle_for_phase(self, phase: str) -> Lifecycle | None:
        for lifecycle in self.lifecycles:
            if phase in lifecycle.phases:
                return lifecycle
        return None


def _normalize_key(key: str) -> str:
    return _CAMEL_BOUNDARY_RE.sub(r"_\1", key).replace("-", "_").lower()


def _normalize_row(row: object, source: str) -> dict[str, object]:
    if not isinstance(row, Mapping):
        raise DescribeError(f"Invalid value for '{source}': expected table/object.")
    typed_row = cast("Mapping[object, object]", row)
    return {_normalize_key(str(key)): value for key, value in typed_row.items()}


def _optional_str(row: dict[str, object], key: str, source: str) -> str | None:
    value = row.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise DescribeError(
            f"Invalid value for '{source}.{key}': expected str, got "
            f"{type(value).__name__} ({value!r})."
        )
    return str(value)


def _required_str(row: dict[str, object], key: str, source: str) -> str:
    value = _optional_str(row, key, source)
    if value is None or not value.strip():
        raise DescribeError(f"Missing required field '{source}.{key}'.")
    return value.strip()


def _bool(row: dict[str, object], key: str, source: str, *, default: bool) -> bool:
    value = row.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise DescribeError(
            f"Invalid value for '{source}.{key}': expected bool, got "
            f"{type(value).__name__} ({value!r})."
        )
    return value


def _rows(value: object, source: str) -> list[object]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DescribeError(f"Invalid value for '{source}': expected array.")
    return cast("list[object]", value)


def _string_map(value: object, source: str) -> dict[str, str]:
    if not isinstance(value, Mapping):
        raise DescribeError(f"Invalid value for '{source}': expected table/object.")
    typed = cast("Mapping[object, object]", value)
    return {str(key): "" if item is None else str(item) for key, item in typed.items()}


_PARAMETER_KEYS = frozenset(
    {
        "name",
        "description",
        # Present in descriptor exports; the report does not show it.
        "type",
        "default_value",
        "alias",
        "required",
        "editable",
        "expression",
        "deprecated",
    }
)
_MOJO_KEYS = frozenset(
    {
        "goal",
        "description",
        "deprecated",
        "implementation",
        "language",
        "phase",
        "execute_goal",
        "execute_phase",
        "execute_lifecycle",
        "report",
        "parameters",
    }
)
_PLUGIN_KEYS = frozenset(
    {
        "group_id",
        "artifact_id",
        "version",
        "goal_prefix",
        "name",
        "description",
        "mojos",
    }
)


def _warn_unknown(row: dict[str, object], known: frozenset[str], source: str) -> None:
    for key in row:
        if key not in known:
            logger.warning("Ignoring unknown descriptor key '%s.%s'.", source, key)


def parse_parameter(raw: object, source: str = "parameter") -> ParameterDescriptor:
    row = _normalize_row(raw, source)
    _warn_unknown(row, _PARAMETER_KEYS, source)
    return ParameterDescriptor(
        name=_required_str(row, "name", source),
        description=_optional_str(row, "description", source),
        default_value=_optional_str(row, "default_value", source),
        alias=_optional_str(row, "alias", source),
        required=_bool(row, "required", source, default=False),
        editable=_bool(row, "editable", source, default=True),
        expression=_optional_str(row, "expression", source),
        deprecated=_optional_str(row, "deprecated", source),
    )


def parse_mojo(raw: object, plugin_prefix: str = "", source: str = "mojo") -> MojoDescriptor:
    row = _normalize_row(raw, source)
    _warn_unknown(row, _MOJO_KEYS, source)
    parameters = tuple(
        parse_parameter(item, f"{source}.parameters[{index}]")
        for index, item in enumerate(_rows(row.get("parameters"), f"{source}.parameters"))
    )
    return MojoDescriptor(
        goal=_required_str(row, "goal", source),
        plugin_prefix=plugin_prefix,
        description=_optional_str(row, "description", source),
        deprecated=_optional_str(row, "deprecated", source),
        implementation=_optional_str(row, "implementation", source),
        language=_optional_str(row, "language", source),
        phase=_optional_str(row, "phase", source),
        execute_goal=_optional_str(row, "execute_goal", source),
        execute_phase=_optional_str(row, "execute_phase", source),
        execute_lifecycle=_optional_str(row, "execute_lifecycle", source),
        report=_bool(row, "report", source, default=False),
        parameters=parameters,
    )


def parse_plugin(raw: object, source: str = "plugin") -> PluginDescriptor:
    row = _normalize_row(raw, source)
    _warn_unknown(row, _PLUGIN_KEYS, source)
    goal_prefix = (_optional_str(row, "goal_prefix", source) or "").strip()

    mojos: tuple[MojoDescriptor, ...] | None = None
    if row.get("mojos") is not None:
        mojos = tuple(
            parse_mojo(item, goal_prefix, f"{source}.mojos[{index}]")
            for index, item in enumerate(_rows(row.get("mojos"), f"{source}.mojos"))
        )

    return PluginDescriptor(
        group_id=_required_str(row, "group_id", source),
        artifact_id=_required_str(row, "artifact_id", source),
        version=_required_str(row, "version", source),
        goal_prefix=goal_prefix,
        name=_optional_str(row, "name", source),
        description=_optional_str(row, "description", source),
        mojos=mojos,
    )


def parse_lifecycle(raw: object, source: str = "lifecycle") -> Lifecycle:
    row = _normalize_row(raw, source)
    phases = tuple(str(item) for item in _rows(row.get("phases"), f"{source}.phases"))
    default_phases_raw = row.get("default_phases")
    return Lifecycle(
        id=_required_str(row, "id", source),
        phases=phases,
        default_phases=(
            None
            if default_phases_raw is None
            else _string_map(default_phases_raw, f"{source}.default_phases")
        ),
    )


def parse_catalog(payload: Mapping[str, object]) -> DescriptorCatalog:
    """Build a catalog from an already-decoded document."""

    row = _normalize_row(payload, "catalog")
    plugins = tuple(
        parse_plugin(item, f"plugins[{index}]")
        for index, item in enumerate(_rows(row.get("plugins"), "plugins"))
    )
    lifecycles = tuple(
        parse_lifecycle(item, f"lifecycles[{index}]")
        for index, item in enumerate(_rows(row.get("lifecycles"), "lifecycles"))
    )
    packaging_phases_raw = row.get("packaging_phases")
    return DescriptorCatalog(
        plugins=plugins,
        lifecycles=lifecycles,
        packaging=(_optional_str(row, "packaging", "catalog") or "jar").strip(),
        packaging_phases=(
            {}
            if packaging_phases_raw is None
            else _string_map(packaging_phases_raw, "packaging_phases")
        ),
    )


def load_catalog(path: Path) -> DescriptorCatalog:
    """Load a descriptor catalog from a `.json` or `.toml` document."""

    if not path.is_file():
        raise FileNotFoundError(f"Descriptor file not found: {path}")
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".toml":
            payload: object = tomllib.loads(text)
        else:
            payload = json.loads(text)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as error:
        raise DescribeError(f"Cannot parse descriptor file '{path}': {error}") from error
    if not isinstance(payload, Mapping):
        raise DescribeError(f"Descriptor file '{path}' must contain a table/object.")
    return parse_catalog(cast("Mapping[str, object]", payload))
