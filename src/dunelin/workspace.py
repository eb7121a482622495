"""Workspace layout: paths, shadow detection, and project listing."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import (
    CONFIG_DIR,
    DEFAULT_CONTEXT_FILE,
    ProjectConfig,
    read_project_config,
    read_workspace_config,
)

SHADOW_DIR = "shadow"
PROJECTS_DIR = "projects"


@dataclass
class ProjectInfo:
    """A project directory with a valid ``dunelin.json``."""
    name: str
    path: Path
    config: ProjectConfig


def shadow_path(workspace: str | Path) -> Path:
    """Return ``<workspace>/.dunelin/shadow``."""
    return Path(workspace) / CONFIG_DIR / SHADOW_DIR


def has_shadow(workspace: str | Path) -> bool:
    """True if the shadow directory is a git working copy."""
    return (shadow_path(workspace) / ".git").exists()


def context_filename(workspace: str | Path) -> str:
    """Return the configured context filename (default ``CLAUDE.md``)."""
    config = read_workspace_config(workspace)
    return config.context_file if config is not None else DEFAULT_CONTEXT_FILE


def read_text_file(path: str | Path) -> str | None:
    """Return the text of *path*, or ``None`` if it can't be read."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def list_projects(workspace: str | Path) -> list[ProjectInfo]:
    """List ``projects/*`` directories that carry a valid ``dunelin.json``.

    Sorted by directory name.  A missing ``projects/`` yields ``[]``.
    """
    projects_dir = Path(workspace) / PROJECTS_DIR
    try:
        entries = sorted(p for p in projects_dir.iterdir() if p.is_dir())
    except OSError:
        return []

    result: list[ProjectInfo] = []
    for entry in entries:
        config = read_project_config(entry)
        if config is not None:
            result.append(ProjectInfo(name=entry.name, path=entry, config=config))
    return result
