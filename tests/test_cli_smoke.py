"""Smoke tests for the CLI entry point."""

from __future__ import annotations

from pathlib import Path

from pluginhelp import __version__


def test_help_lists_command_groups(run_pluginhelp) -> None:
    result = run_pluginhelp(["--help"])

    assert result.returncode == 0
    for expected in ["text", "describe", "effective", "config", "serve"]:
        assert expected in result.stdout


def test_version_flag(run_pluginhelp) -> None:
    result = run_pluginhelp(["--version"])

    assert result.returncode == 0
    assert __version__ in result.stdout


def test_text_reflow_wraps_argument(run_pluginhelp) -> None:
    result = run_pluginhelp(
        ["text", "reflow", "alpha beta gamma", "--indent", "1", "--width", "12"]
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout == "  alpha beta\n  gamma\n"


def test_text_reflow_reads_stdin(run_pluginhelp) -> None:
    result = run_pluginhelp(
        ["text", "reflow", "--style", "key-value", "--key", "Name", "--width", "14"],
        stdin="Demo   Plugin\nfor tests\n",
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout.splitlines() == ["Name: Demo", "Plugin for", "tests"]


def test_invalid_width_exits_with_error(run_pluginhelp) -> None:
    result = run_pluginhelp(["text", "reflow", "x", "--width", "0"])

    assert result.returncode == 1
    assert result.stdout == ""
    assert "error: line_length must be >= 1, got 0." in result.stderr


def test_describe_plugin(run_pluginhelp, descriptors_path: Path) -> None:
    result = run_pluginhelp(
        ["describe", "plugin", "--descriptors", str(descriptors_path), "--plugin", "demo"]
    )

    assert result.returncode == 0, result.stderr
    lines = result.stdout.splitlines()
    assert lines[0] == "org.example.plugins:demo-maven-plugin:1.2.0"
    assert "This plugin has 2 goals:" in lines
    assert lines[-1] == "For more information, run 'pluginhelp describe [...] --detail'"


def test_describe_goal_command_with_detail(run_pluginhelp, descriptors_path: Path) -> None:
    result = run_pluginhelp(
        [
            "describe",
            "plugin",
            "--descriptors",
            str(descriptors_path),
            "--cmd",
            "demo:run",
            "--detail",
        ]
    )

    assert result.returncode == 0, result.stderr
    lines = result.stdout.splitlines()
    assert lines[:2] == ["'demo:run' is a plugin goal (aka mojo).", "Mojo: 'demo:run'"]
    assert "    skip (Default: false)" in lines


def test_describe_phase(run_pluginhelp, descriptors_path: Path) -> None:
    result = run_pluginhelp(["describe", "phase", "clean", "--descriptors", str(descriptors_path)])

    assert result.returncode == 0, result.stderr
    assert result.stdout.splitlines()[1] == "* pre-clean: Not defined"


def test_describe_unknown_phase_fails(run_pluginhelp, descriptors_path: Path) -> None:
    result = run_pluginhelp(["describe", "phase", "deploy", "--descriptors", str(descriptors_path)])

    assert result.returncode == 1
    assert "error: The given phase 'deploy' is an unknown phase." in result.stderr


def test_describe_missing_descriptor_file(run_pluginhelp, tmp_path: Path) -> None:
    result = run_pluginhelp(
        ["describe", "plugin", "--descriptors", str(tmp_path / "none.json"), "--plugin", "demo"]
    )

    assert result.returncode == 1
    assert "error: Descriptor file not found" in result.stderr


def test_describe_output_file_logs_destination(
    run_pluginhelp, descriptors_path: Path, tmp_path: Path
) -> None:
    destination = tmp_path / "help" / "demo.txt"

    result = run_pluginhelp(
        [
            "-v",
            "describe",
            "plugin",
            "--descriptors",
            str(descriptors_path),
            "--plugin",
            "demo",
            "--output",
            str(destination),
        ]
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout.startswith("Wrote descriptions to: ")
    assert destination.read_text(encoding="utf-8").startswith("org.example.plugins:demo")
    assert "Wrote output." in result.stderr


def test_effective_format(run_pluginhelp, project_xml_path: Path) -> None:
    result = run_pluginhelp(
        ["effective", "format", str(project_xml_path), "--comment", "Effective POM for demo"]
    )

    assert result.returncode == 0, result.stderr
    lines = result.stdout.splitlines()
    assert lines[0] == '<?xml version="1.0" encoding="UTF-8"?>'
    assert any("Generated by pluginhelp" in line for line in lines)
    assert any("Effective POM for demo" in line for line in lines)
    assert lines[-1] == "</project>"


def test_effective_format_no_header(run_pluginhelp, project_xml_path: Path) -> None:
    result = run_pluginhelp(
        ["effective", "format", str(project_xml_path), "--no-header", "--omit-declaration"]
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout.splitlines()[0] == "<project>"


def test_config_show_reads_repo_config(run_pluginhelp, repo_root: Path) -> None:
    (repo_root / ".pluginhelp" / "config.toml").write_text(
        "[format]\nline_length = 66\n", encoding="utf-8"
    )

    result = run_pluginhelp(["config", "show"])

    assert result.returncode == 0, result.stderr
    assert "Line length: 66" in result.stdout


def test_config_errors_are_reported(run_pluginhelp, repo_root: Path) -> None:
    (repo_root / ".pluginhelp" / "config.toml").write_text(
        "[format]\nline_length = 'wide'\n", encoding="utf-8"
    )

    result = run_pluginhelp(["text", "reflow", "x"])

    assert result.returncode == 1
    assert "format.line_length" in result.stderr
