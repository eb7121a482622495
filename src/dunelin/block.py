"""The dunelin-managed block inside a workspace context file."""

from __future__ import annotations

from pathlib import Path

from . import __version__
from .config import WorkspaceConfig

START_MARKER = "<!-- dunelin:start -->"
END_MARKER = "<!-- dunelin:end -->"

_HEADER = f"""\
> **Dunelin v{__version__}** - This block is managed by Dunelin and updated automatically.
> If you see another dunelin block in this file, please remove it (keep this one).

## Workspace Management
This workspace is managed by Dunelin. Configuration lives in `.dunelin/config.json`.

A query server is available via `dunelin mcp`; AI tools can read workspace structure programmatically:
- `dunelin_get_workspace`: root context and project list
- `dunelin_get_project`: project context, team, metadata
- `dunelin_list_projects`: all projects overview
"""

_WITH_SHADOW = """
## Context Persistence
This workspace uses a **shadow repo** (`.dunelin/shadow/`) to version and share context via git.

**When you update context files** (CLAUDE.md, HUMANS.md, changelog entries):
1. Edit the file inside `.dunelin/shadow/`; this is the canonical copy
2. Commit: `cd .dunelin/shadow && git add -A && git commit -m "update context"`
3. Push: `git push`
4. Run `dunelin update` to sync changes to workspace root

Never edit context files at workspace root directly; `dunelin update` overwrites them.
"""

_WITHOUT_SHADOW = """
## Context Persistence
This workspace does not have a shadow repo. Edit context files directly at workspace root.
To enable versioned context, recreate this workspace from a git template (`dunelin init`).
"""


def render_block(config: WorkspaceConfig | None = None) -> str:
    """Return the full managed block, markers included."""
    shadow = bool(config is not None and config.shadow)
    structure = [
        ".dunelin/config.json              workspace config (managed by dunelin)",
    ]
    if shadow:
        structure.append(".dunelin/shadow/                  shadow repo (versioned context)")
    structure += [
        "projects/{name}/CLAUDE.md         project context",
        "projects/{name}/HUMANS.md         project team",
        "projects/{name}/dunelin.json      project metadata (repos, status, tags)",
        "projects/{name}/changelog/        decision log",
        "projects/{name}/repos/            code repositories (cloned or linked)",
    ]
    return (
        f"{START_MARKER}\n"
        + _HEADER
        + (_WITH_SHADOW if shadow else _WITHOUT_SHADOW)
        + "\n## Workspace Structure\n```\n"
        + "\n".join(structure)
        + f"\n```\n{END_MARKER}"
    )


def inject_block(path: str | Path, config: WorkspaceConfig | None = None) -> bool:
    """Insert or replace the managed block in the file at *path*.

    Text between existing markers is replaced; otherwise the block is
    appended.  Returns ``False`` without writing if *path* is missing.
    """
    path = Path(path)
    if not path.is_file():
        return False

    content = path.read_text(encoding="utf-8")
    block = render_block(config)
    start = content.find(START_MARKER)
    end = content.find(END_MARKER, start if start != -1 else 0)

    if start != -1 and end != -1:
        content = content[:start] + block + content[end + len(END_MARKER):]
    else:
        content = content.rstrip() + "\n\n" + block + "\n"

    path.write_text(content, encoding="utf-8")
    return True
