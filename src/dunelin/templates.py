"""Built-in workspace template and placeholder rendering."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class TemplateFile:
    path: str       # relative path (forward slashes)
    content: str


@dataclass(frozen=True)
class TemplateVars:
    workspace_name: str
    user_name: str
    user_role: str


_RENDERED_SUFFIXES = (".md", ".json")


BASE_TEMPLATE: list[TemplateFile] = [
    TemplateFile("CLAUDE.md", """\
# {Workspace Name}

## Me
{Name}, {Role}.

## Projects
| Name | Description | Status |
|------|-------------|--------|

> Each project has its own context file in projects/{name}/

## Terms
| Term | Meaning |
|------|---------|

## Tools & Integrations
| Tool | Used for |
|------|----------|
| Dunelin | Workspace scaffolding and context management |
"""),
    TemplateFile(".mcp.json", """\
{
  "mcpServers": {
    "dunelin": {
      "command": "dunelin",
      "args": ["mcp"],
      "env": {
        "DUNELIN_WORKSPACE": "."
      }
    }
  }
}
"""),
    TemplateFile("projects/example/CLAUDE.md", """\
# Example Project

## Overview
This is an example project showing the dunelin workspace structure. Replace or delete this folder and create your own projects.

**Status:** Active
**Repo(s):** See [dunelin.json](./dunelin.json) for repository metadata.

## Architecture
[To be filled]

## Tech Stack
[To be filled]

## Key Concepts
| Term | Meaning |
|------|---------|

## Project Files
- [HUMANS.md](./HUMANS.md): team members working on this project
- [dunelin.json](./dunelin.json): project metadata (repos, status, tags)
- [changelog/](./changelog/): decision log and session summaries
"""),
    TemplateFile("projects/example/HUMANS.md", """\
# Example Project Team

## Members
| Name | Role | Email |
|------|------|-------|

## Working Preferences
- [To be filled]
"""),
    TemplateFile("projects/example/dunelin.json", """\
{
  "name": "example",
  "description": "Example project showing the dunelin structure",
  "status": "active",
  "repos": [],
  "tags": []
}
"""),
    TemplateFile("projects/example/changelog/.gitkeep", ""),
]


def render_template(content: str, variables: TemplateVars) -> str:
    """Substitute ``{Workspace Name}``, ``{Name}`` and ``{Role}``."""
    return (
        content
        .replace("{Workspace Name}", variables.workspace_name)
        .replace("{Name}", variables.user_name)
        .replace("{Role}", variables.user_role)
    )


def write_template(
    files: list[TemplateFile], dest: str | Path, variables: TemplateVars,
) -> list[str]:
    """Write *files* under *dest*, rendering ``.md`` and ``.json`` files.

    Returns the relative paths written.
    """
    dest = Path(dest)
    dest.mkdir(parents=True, exist_ok=True)
    written: list[str] = []
    for tf in files:
        out = dest / tf.path
        out.parent.mkdir(parents=True, exist_ok=True)
        content = tf.content
        if tf.path.endswith(_RENDERED_SUFFIXES):
            content = render_template(content, variables)
        out.write_text(content, encoding="utf-8")
        written.append(tf.path)
    return written
