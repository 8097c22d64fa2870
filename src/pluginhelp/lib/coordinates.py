"""Plugin lookup coordinates: a goal prefix or `groupId:artifactId[:version]`."""

from __future__ import annotations

from dataclasses import dataclass

from pluginhelp.lib.descriptors import DescriptorCatalog, MojoDescriptor, PluginDescriptor
from pluginhelp.lib.errors import DescribeError

_MALFORMED_PLUGIN = (
    "plugin parameter must be a plugin prefix, or conform to: 'groupId:artifactId[:version]'."
)


@dataclass(frozen=True, slots=True)
class PluginCoordinates:
    prefix: str | None = None
    group_id: str | None = None
    artifact_id: str | None = None
    version: str | None = None

    @property
    def label(self) -> str:
        """Human-readable form used in error messages."""
        if self.prefix:
            return self.prefix
        parts = [part for part in (self.group_id, self.artifact_id, self.version) if part]
        return ":".join(parts)


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def parse_plugin_coordinates(
    plugin: str | None = None,
    group_id: str | None = None,
    artifact_id: str | None = None,
    version: str | None = None,
) -> PluginCoordinates:
    """Parse the `--plugin` value, falling back to explicit coordinates.

    >>> parse_plugin_coordinates("org.example:demo-plugin")
    PluginCoordinates(prefix=None, group_id='org.example', artifact_id='demo-plugin', version=None)
    """

    plugin = _blank_to_none(plugin)
    if plugin is None:
        return PluginCoordinates(
            group_id=_blank_to_none(group_id),
            artifact_id=_blank_to_none(artifact_id),
            version=_blank_to_none(version),
        )

    if ":" not in plugin:
        return PluginCoordinates(prefix=plugin)

    parts = plugin.split(":")
    while parts and not parts[-1]:
        parts.pop()
    if len(parts) == 1:
        return PluginCoordinates(prefix=parts[0])
    if len(parts) == 2:
        return PluginCoordinates(group_id=parts[0], artifact_id=parts[1])
    if len(parts) == 3:
        return PluginCoordinates(group_id=parts[0], artifact_id=parts[1], version=parts[2])
    raise DescribeError(_MALFORMED_PLUGIN)


def _matches(plugin: PluginDescriptor, coords: PluginCoordinates) -> bool:
    if coords.prefix is not None:
        return plugin.goal_prefix == coords.prefix
    if plugin.group_id != coords.group_id or plugin.artifact_id != coords.artifact_id:
        return False
    return coords.version is None or plugin.version == coords.version


def find_plugin(catalog: DescriptorCatalog, coords: PluginCoordinates) -> PluginDescriptor:
    """Return the catalog entry matching ``coords``.

    Without a version the last matching entry wins, so catalogs listing several
    versions resolve to the most recently declared one.
    """

    if coords.prefix is None and (coords.group_id is None or coords.artifact_id is None):
        raise DescribeError(
            "You must specify either: both 'groupId' and 'artifactId' parameters OR a "
            "'plugin' parameter OR a 'cmd' parameter."
        )
    found: PluginDescriptor | None = None
    for plugin in catalog.plugins:
        if _matches(plugin, coords):
            found = plugin
    if found is None:
        raise DescribeError(f"Plugin '{coords.label}' not found in the descriptor catalog.")
    return found


def find_mojo(plugin: PluginDescriptor, goal: str, coords: PluginCoordinates) -> MojoDescriptor:
    mojo = plugin.find_mojo(goal)
    if mojo is None:
        raise DescribeError(
            f"The goal '{goal}' does not exist in the plugin '{coords.label or plugin.id}'"
        )
    return mojo


def split_goal_command(cmd: str) -> tuple[PluginCoordinates, str]:
    """Split `prefix:goal` or `groupId:artifactId[:version]:goal` into lookup parts."""

    parts = [part.strip() for part in cmd.split(":")]
    if any(not part for part in parts):
        raise DescribeError(f"Unable to get descriptor for {cmd}")
    goal = parts[-1]
    if len(parts) == 2:
        return PluginCoordinates(prefix=parts[0]), goal
    if len(parts) == 3:
        return PluginCoordinates(group_id=parts[0], artifact_id=parts[1]), goal
    if len(parts) == 4:
        return PluginCoordinates(group_id=parts[0], artifact_id=parts[1], version=parts[2]), goal
    raise DescribeError(f"Unable to get descriptor for {cmd}")
