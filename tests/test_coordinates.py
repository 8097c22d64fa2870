"""Plugin coordinate parsing and catalog lookup."""

from __future__ import annotations

import pytest

from pluginhelp.lib.coordinates import (
    PluginCoordinates,
    find_mojo,
    find_plugin,
    parse_plugin_coordinates,
    split_goal_command,
)
from pluginhelp.lib.descriptors import DescriptorCatalog, MojoDescriptor, PluginDescriptor
from pluginhelp.lib.errors import DescribeError


def _catalog() -> DescriptorCatalog:
    return DescriptorCatalog(
        plugins=(
            PluginDescriptor("org.example", "demo", "1.0", goal_prefix="demo"),
            PluginDescriptor(
                "org.example",
                "demo",
                "2.0",
                goal_prefix="demo",
                mojos=(MojoDescriptor(goal="run", plugin_prefix="demo"),),
            ),
            PluginDescriptor("org.other", "tool", "0.9", goal_prefix="tool"),
        )
    )


@pytest.mark.parametrize(
    ("plugin", "expected"),
    [
        ("demo", PluginCoordinates(prefix="demo")),
        ("org.example:demo", PluginCoordinates(group_id="org.example", artifact_id="demo")),
        (
            "org.example:demo:1.0",
            PluginCoordinates(group_id="org.example", artifact_id="demo", version="1.0"),
        ),
        ("demo:", PluginCoordinates(prefix="demo")),
        ("org.example:demo::", PluginCoordinates(group_id="org.example", artifact_id="demo")),
    ],
)
def test_parse_plugin_coordinates(plugin: str, expected: PluginCoordinates) -> None:
    assert parse_plugin_coordinates(plugin) == expected


def test_parse_falls_back_to_explicit_coordinates() -> None:
    assert parse_plugin_coordinates("  ", "g", "a", " ") == PluginCoordinates(
        group_id="g", artifact_id="a"
    )


def test_parse_rejects_too_many_parts() -> None:
    with pytest.raises(DescribeError, match="must be a plugin prefix"):
        parse_plugin_coordinates("a:b:c:d")


def test_label_prefers_prefix() -> None:
    assert PluginCoordinates(prefix="demo").label == "demo"
    assert PluginCoordinates(group_id="g", artifact_id="a", version="1").label == "g:a:1"


def test_find_plugin_by_prefix_returns_last_match() -> None:
    assert find_plugin(_catalog(), PluginCoordinates(prefix="demo")).version == "2.0"


def test_find_plugin_by_exact_version() -> None:
    coords = PluginCoordinates(group_id="org.example", artifact_id="demo", version="1.0")
    assert find_plugin(_catalog(), coords).version == "1.0"


def test_find_plugin_requires_coordinates() -> None:
    with pytest.raises(DescribeError, match="You must specify either"):
        find_plugin(_catalog(), PluginCoordinates(group_id="org.example"))


def test_find_plugin_not_found() -> None:
    with pytest.raises(DescribeError, match="Plugin 'missing' not found"):
        find_plugin(_catalog(), PluginCoordinates(prefix="missing"))


def test_find_mojo_unknown_goal() -> None:
    coords = PluginCoordinates(prefix="demo")
    plugin = find_plugin(_catalog(), coords)

    assert find_mojo(plugin, "run", coords).goal == "run"
    with pytest.raises(DescribeError, match="The goal 'nope' does not exist in the plugin 'demo'"):
        find_mojo(plugin, "nope", coords)


@pytest.mark.parametrize(
    ("cmd", "coords", "goal"),
    [
        ("demo:run", PluginCoordinates(prefix="demo"), "run"),
        ("g:a:run", PluginCoordinates(group_id="g", artifact_id="a"), "run"),
        ("g:a:1.0:run", PluginCoordinates(group_id="g", artifact_id="a", version="1.0"), "run"),
    ],
)
def test_split_goal_command(cmd: str, coords: PluginCoordinates, goal: str) -> None:
    assert split_goal_command(cmd) == (coords, goal)


@pytest.mark.parametrize("cmd", ["a:b:c:d:e", "demo:", ":run"])
def test_split_goal_command_rejects_malformed(cmd: str) -> None:
    with pytest.raises(DescribeError, match="Unable to get descriptor"):
        split_goal_command(cmd)
