"""Shared pytest fixtures for library and CLI integration checks."""

from __future__ import annotations

import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
FIXTURES = Path(__file__).resolve().parent / "fixtures"

_ENV_OVERRIDES = (
    "PLUGINHELP_REPO_ROOT",
    "PLUGINHELP_LINE_LENGTH",
    "PLUGINHELP_INDENT_SIZE",
    "PLUGINHELP_DETAIL_HINT",
    "PLUGINHELP_HEADER_TITLE",
    "PLUGINHELP_HEADER_URL",
)


@dataclass(frozen=True, slots=True)
class CliResult:
    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def package_root() -> Path:
    return PACKAGE_ROOT


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    (root / ".pluginhelp").mkdir(parents=True)
    return root


@pytest.fixture
def descriptors_path() -> Path:
    return FIXTURES / "descriptors" / "demo.json"


@pytest.fixture
def project_xml_path() -> Path:
    return FIXTURES / "effective" / "project.xml"


@pytest.fixture
def cli_env(package_root: Path, repo_root: Path) -> dict[str, str]:
    env = {key: value for key, value in os.environ.items() if key not in _ENV_OVERRIDES}
    existing = env.get("PYTHONPATH", "")
    root = str(package_root / "src")
    env["PYTHONPATH"] = root if not existing else f"{root}{os.pathsep}{existing}"
    env["PLUGINHELP_REPO_ROOT"] = str(repo_root)
    return env


@pytest.fixture
def run_pluginhelp(package_root: Path, cli_env: dict[str, str]) -> Callable[..., CliResult]:
    def _run(args: list[str], timeout: float = 15.0, stdin: str | None = None) -> CliResult:
        completed = subprocess.run(
            [sys.executable, "-m", "pluginhelp", *args],
            cwd=package_root,
            env=cli_env,
            input=stdin,
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
        )
        return CliResult(
            args=tuple(args),
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )

    return _run
