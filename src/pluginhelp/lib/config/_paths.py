"""Path resolution helpers for repository-scoped config files."""

from __future__ import annotations

import os
from pathlib import Path


def resolve_repo_root(explicit: Path | None = None) -> Path:
    """Resolve the repository root that owns `.pluginhelp/`.

    Precedence:
    1. Explicit function argument.
    2. `PLUGINHELP_REPO_ROOT` environment variable.
    3. Current directory / ancestors containing `.pluginhelp/` or a `.git` entry.
    4. Current working directory.
    """

    if explicit is not None:
        return explicit.expanduser().resolve()

    env_root = os.getenv("PLUGINHELP_REPO_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()

    cwd = Path.cwd().resolve()
    for candidate in (cwd, *cwd.parents):
        if (candidate / ".pluginhelp").is_dir():
            return candidate
        # A .git file (worktree/submodule) or directory marks a repo boundary.
        if (candidate / ".git").exists():
            return candidate
    return cwd


def config_path(repo_root: Path) -> Path:
    return repo_root / ".pluginhelp" / "config.toml"
