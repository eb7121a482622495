"""Read-only workspace queries.

Each tool takes the workspace path explicitly plus the request
arguments, and returns a plain dict.  A missing project is reported with
an ``error`` key, never raised.  :mod:`dunelin.server` exposes the tools
over MCP.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

from .config import read_project_config
from .workspace import PROJECTS_DIR, context_filename, list_projects, read_text_file


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------

def get_workspace(workspace: str | Path, params: dict[str, Any] | None = None) -> dict[str, Any]:
    """Root context file plus name/description/status of every project."""
    workspace = Path(workspace)
    context_file = context_filename(workspace)
    return {
        "contextFile": context_file,
        "context": read_text_file(workspace / context_file),
        "projects": [
            {
                "name": p.config.name,
                "description": p.config.description,
                "status": p.config.status,
            }
            for p in list_projects(workspace)
        ],
    }


def get_project(workspace: str | Path, params: dict[str, Any] | None = None) -> dict[str, Any]:
    """Context file, ``HUMANS.md`` and metadata for one project.

    Params:
        project: Folder name under ``projects/``.
    """
    name = params.get("project", "") if isinstance(params, dict) else ""
    workspace = Path(workspace)
    if not isinstance(name, str) or not name or "/" in name or "\\" in name or name in (".", ".."):
        return {"error": f'Project "{name}" not found.'}

    project_path = workspace / PROJECTS_DIR / name
    context = read_text_file(project_path / context_filename(workspace))
    config = read_project_config(project_path)
    if config is None and context is None:
        return {"error": f'Project "{name}" not found.'}

    return {
        "project": name,
        "context": context,
        "humans": read_text_file(project_path / "HUMANS.md"),
        "metadata": config.to_dict() if config is not None else None,
    }


def list_all_projects(workspace: str | Path, params: dict[str, Any] | None = None) -> dict[str, Any]:
    """Every project with name, description, status and repos."""
    return {
        "projects": [
            {
                "name": p.config.name,
                "description": p.config.description,
                "status": p.config.status,
                "repos": [r.to_dict() for r in p.config.repos],
            }
            for p in list_projects(workspace)
        ],
    }


ToolFn = Callable[[Path, dict[str, Any]], dict[str, Any]]

TOOL_MAP: dict[str, ToolFn] = {
    "dunelin_get_workspace": get_workspace,
    "dunelin_get_project": get_project,
    "dunelin_list_projects": list_all_projects,
}

TOOL_DESCRIPTIONS = {
    "dunelin_get_workspace": (
        "Returns the root workspace context file content and a list of all "
        "projects with their name, description, and status.",
        {"type": "object", "properties": {}},
    ),
    "dunelin_get_project": (
        "Returns a specific project's context file content, HUMANS.md content, "
        "and dunelin.json metadata including repos, status, and tags.",
        {
            "type": "object",
            "properties": {
                "project": {
                    "type": "string",
                    "description": "Project name (folder name under projects/)",
                },
            },
            "required": ["project"],
        },
    ),
    "dunelin_list_projects": (
        "Lists all projects in the workspace with their name, description, "
        "status, and repos.",
        {"type": "object", "properties": {}},
    ),
}

