"""Global output flags: --json, --porcelain, --format."""

from __future__ import annotations

import json
from pathlib import Path


def test_json_flag(run_pluginhelp) -> None:
    result = run_pluginhelp(["--json", "text", "reflow", "alpha beta", "--width", "6"])

    assert result.returncode == 0, result.stderr
    assert json.loads(result.stdout) == {"lines": ["alpha", "beta"], "style": "plain"}


def test_format_option_after_command(run_pluginhelp) -> None:
    result = run_pluginhelp(["text", "reflow", "alpha", "--format=json"])

    assert result.returncode == 0, result.stderr
    assert json.loads(result.stdout)["lines"] == ["alpha"]


def test_porcelain_flag(run_pluginhelp, descriptors_path: Path) -> None:
    result = run_pluginhelp(
        ["--porcelain", "describe", "phase", "clean", "--descriptors", str(descriptors_path)]
    )

    assert result.returncode == 0, result.stderr
    lines = result.stdout.splitlines()
    assert "lines\t* pre-clean: Not defined" in lines
    assert "output_path\tNone" in lines


def test_unknown_format_is_rejected(run_pluginhelp) -> None:
    result = run_pluginhelp(["--format", "yaml", "text", "reflow", "x"])

    assert result.returncode != 0
    assert "--format must be one of" in result.stderr
