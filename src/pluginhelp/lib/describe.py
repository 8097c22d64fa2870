"""Describe report: plugin, goal, parameter, and lifecycle phase help text."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

import structlog
from bs4 import BeautifulSoup

from pluginhelp.lib.config.settings import DEFAULT_DETAIL_HINT
from pluginhelp.lib.coordinates import (
    PluginCoordinates,
    find_mojo,
    find_plugin,
    parse_plugin_coordinates,
    split_goal_command,
)
from pluginhelp.lib.descriptors import (
    DescriptorCatalog,
    MojoDescriptor,
    ParameterDescriptor,
    PluginDescriptor,
)
from pluginhelp.lib.errors import DescribeError
from pluginhelp.lib.reflow import TextReflowFormatter

logger = structlog.get_logger(__name__)

NOT_DEFINED = "Not defined"
NO_REASON = "No reason given"
NO_DESCRIPTION = "(no description available)"
REPORT_NOTE = "This goal should be used as a report."

_EXPRESSION_RE = re.compile(r"^\$\{([^}]+)\}$")


def to_description(description: str | None) -> str:
    """Plain-text form of an (often HTML) descriptor description."""

    if not description:
        return NO_DESCRIPTION
    text = BeautifulSoup(description, "html.parser").get_text(" ")
    return " ".join(text.split()) or NO_DESCRIPTION


def deprecation_reason(deprecated: str | None) -> str | None:
    if deprecated is None:
        return None
    return deprecated.strip() or NO_REASON


def _goal_list(bindings: str) -> str:
    return ", ".join(token.strip() for token in bindings.split(",") if token.strip())


@dataclass(frozen=True, slots=True)
class DescribeRequest:
    """What to describe; mirrors the `describe` command flags."""

    plugin: str | None = None
    group_id: str | None = None
    artifact_id: str | None = None
    version: str | None = None
    goal: str | None = None
    cmd: str | None = None


@dataclass(slots=True)
class DescribeWriter:
    """Builds describe output as logical lines."""

    formatter: TextReflowFormatter = field(default_factory=TextReflowFormatter)
    detail: bool = False
    minimal: bool = False
    detail_hint: str = DEFAULT_DETAIL_HINT

    def describe(self, catalog: DescriptorCatalog, request: DescribeRequest) -> list[str]:
        lines: list[str] = []
        coords: PluginCoordinates | None = None
        goal = request.goal

        if request.cmd:
            command_lines, coords, command_goal = self.describe_command(request.cmd, catalog)
            lines.extend(command_lines)
            if coords is None:
                return lines
            goal = command_goal

        if coords is None:
            coords = parse_plugin_coordinates(
                request.plugin, request.group_id, request.artifact_id, request.version
            )
        plugin = find_plugin(catalog, coords)
        if goal:
            lines.extend(self.describe_mojo(find_mojo(plugin, goal, coords)))
        else:
            lines.extend(self.describe_plugin(plugin))
        return lines

    def describe_plugin(self, plugin: PluginDescriptor) -> list[str]:
        fmt = self.formatter
        lines = fmt.plain(plugin.id, 0)
        lines.append("")

        name = plugin.name
        if not name:
            logger.warning("Plugin descriptor has no name; using its id.", plugin=plugin.id)
            name = plugin.id
        lines += fmt.key_value("Name", name, 0)
        lines += fmt.paragraph("Description", to_description(plugin.description), 0)
        lines += fmt.key_value("Group Id", plugin.group_id, 0)
        lines += fmt.key_value("Artifact Id", plugin.artifact_id, 0)
        lines += fmt.key_value("Version", plugin.version, 0)
        lines += fmt.key_value("Goal Prefix", plugin.goal_prefix, 0)
        lines.append("")

        if not plugin.mojos:
            lines += fmt.plain("This plugin has no goals.", 0)
            return lines

        if not self.minimal:
            count = len(plugin.mojos)
            lines += fmt.plain(f"This plugin has {count} goal{'s' if count > 1 else ''}:", 0)
            lines.append("")
            for mojo in sorted(plugin.mojos, key=lambda item: item.goal.lower()):
                lines += self._mojo_guts(mojo)
                lines.append("")

        if not self.detail:
            lines.append(self.detail_hint)
        return lines

    def describe_mojo(self, mojo: MojoDescriptor) -> list[str]:
        lines = [f"Mojo: '{mojo.full_goal_name}'"]
        lines += self._mojo_guts(mojo)
        lines.append("")
        if not self.detail:
            lines.append(self.detail_hint)
        return lines

    def _mojo_guts(self, mojo: MojoDescriptor) -> list[str]:
        fmt = self.formatter
        lines = fmt.plain(mojo.full_goal_name, 0)
        lines += fmt.paragraph("Description", to_description(mojo.description), 1)

        reason = deprecation_reason(mojo.deprecated)
        if reason:
            lines += fmt.plain(f"Deprecated. {reason}", 1)
        if mojo.report:
            lines += fmt.key_value("Note", REPORT_NOTE, 1)

        if not self.detail:
            return lines

        lines += fmt.key_value("Implementation", mojo.implementation, 1)
        lines += fmt.key_value("Language", mojo.language, 1)
        if mojo.phase:
            lines += fmt.key_value("Bound to phase", mojo.phase, 1)

        if mojo.execute_goal or mojo.execute_phase:
            lines += fmt.plain("Before this goal executes, it will call:", 1)
            if mojo.execute_goal:
                lines += fmt.key_value("Single goal", f"'{mojo.execute_goal}'", 2)
            if mojo.execute_phase:
                call = f"Phase: '{mojo.execute_phase}'"
                if mojo.execute_lifecycle:
                    call += f" in Lifecycle Overlay: '{mojo.execute_lifecycle}'"
                lines += fmt.plain(call, 2)

        lines.append("")
        lines += self._parameters(mojo)
        return lines

    def _parameters(self, mojo: MojoDescriptor) -> list[str]:
        fmt = self.formatter
        if not mojo.parameters:
            return fmt.plain("This mojo doesn't use any parameters.", 1)

        lines = fmt.plain("Available parameters:", 1)
        for parameter in sorted(mojo.parameters, key=lambda item: item.name.lower()):
            if not parameter.editable:
                continue
            lines.append("")
            lines += self._parameter(parameter)
        return lines

    def _parameter(self, parameter: ParameterDescriptor) -> list[str]:
        fmt = self.formatter
        default = f" (Default: {parameter.default_value})" if parameter.default_value else ""
        lines = fmt.plain(f"{parameter.name}{default}", 2)

        if parameter.alias:
            lines += fmt.key_value("Alias", parameter.alias, 3)
        if parameter.required:
            lines += fmt.key_value("Required", "true", 3)
        if parameter.expression:
            match = _EXPRESSION_RE.match(parameter.expression)
            if match:
                lines += fmt.key_value("User property", match.group(1), 3)
            else:
                lines += fmt.key_value("Expression", parameter.expression, 3)

        lines += fmt.plain(to_description(parameter.description), 3)

        reason = deprecation_reason(parameter.deprecated)
        if reason:
            lines += fmt.plain(f"Deprecated. {reason}", 3)
        return lines

    def describe_phase(self, phase: str, catalog: DescriptorCatalog) -> list[str]:
        lifecycle = catalog.lifecycle_for_phase(phase)
        if lifecycle is None:
            raise DescribeError(f"The given phase '{phase}' is an unknown phase.")

        if lifecycle.default_phases is not None:
            lines = [
                f"'{phase}' is a phase within the '{lifecycle.id}' lifecycle, "
                "which has the following phases:"
            ]
            for key in lifecycle.phases:
                value = lifecycle.default_phases.get(key)
                lines.append(f"* {key}: {value if value is not None else NOT_DEFINED}")
            return lines

        lines = [f"'{phase}' is a phase corresponding to this plugin:"]
        binding = catalog.packaging_phases.get(phase)
        if binding is not None:
            lines.append(binding)
        lines.append("")
        lines.append(
            f"It is a part of the lifecycle for the POM packaging '{catalog.packaging}'. "
            "This lifecycle includes the following phases:"
        )
        for key in lifecycle.phases:
            goals = _goal_list(catalog.packaging_phases.get(key) or "")
            lines.append(f"* {key}: {goals or NOT_DEFINED}")
        return lines

    def describe_command(
        self, cmd: str, catalog: DescriptorCatalog
    ) -> tuple[list[str], PluginCoordinates | None, str | None]:
        """Describe a phase, or resolve a goal command to the plugin it belongs to.

        Returns the lines written so far plus, for goals, the coordinates and
        goal that should be described next.
        """

        cmd = cmd.strip()
        if ":" not in cmd:
            return self.describe_phase(cmd, catalog), None, None

        coords, goal = split_goal_command(cmd)
        try:
            plugin = find_plugin(catalog, coords)
        except DescribeError as error:
            raise DescribeError(f"Unable to get descriptor for {cmd}: {error}") from error
        find_mojo(plugin, goal, coords)

        resolved = PluginCoordinates(
            group_id=plugin.group_id,
            artifact_id=plugin.artifact_id,
            version=plugin.version,
        )
        return [f"'{cmd}' is a plugin goal (aka mojo)."], resolved, goal
