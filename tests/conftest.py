"""Shared fixtures for dunelin tests."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from dulwich import porcelain

AUTHOR = b"Test <test@example.com>"


def write_tree(root: Path, files: dict) -> Path:
    """Write ``{relative_path: str | bytes}`` under *root*."""
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            p.write_bytes(content)
        else:
            p.write_text(content)
    return root


def write_config(workspace: Path, **fields) -> Path:
    """Write ``.dunelin/config.json`` with valid timestamps plus *fields*."""
    data = {
        "version": "1.0.0",
        "contextFile": "CLAUDE.md",
        "template": "custom",
        "templateUrl": None,
        "createdAt": "2026-01-01T00:00:00Z",
        "updatedAt": "2026-01-01T00:00:00Z",
    }
    data.update(fields)
    path = workspace / ".dunelin" / "config.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))
    return path


def commit_files(repo_path: Path, files: dict, message: bytes = b"update") -> None:
    """Write *files* into a non-bare repo and commit them."""
    write_tree(repo_path, files)
    porcelain.add(str(repo_path), paths=[str(repo_path / rel) for rel in files])
    porcelain.commit(str(repo_path), message=message, author=AUTHOR, committer=AUTHOR)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def workspace(tmp_path):
    """A workspace with shadow enabled and an (unpulled) shadow working copy.

    The shadow only needs a ``.git`` directory to be detected; tests that
    exercise real pulls use the ``upstream`` fixture instead.
    """
    ws = tmp_path / "ws"
    ws.mkdir()
    write_config(ws, shadow=True)
    (ws / ".dunelin" / "shadow" / ".git").mkdir(parents=True)
    return ws


@pytest.fixture
def shadow(workspace):
    return workspace / ".dunelin" / "shadow"


@pytest.fixture
def upstream(tmp_path):
    """A non-bare git repo with one commit, usable as a template URL."""
    p = tmp_path / "upstream"
    porcelain.init(str(p)).close()
    commit_files(p, {
        "CLAUDE.md": "# Team workspace\n",
        "projects/web/CLAUDE.md": "# Web\n",
        "projects/web/dunelin.json": '{"name": "web"}\n',
    }, message=b"initial")
    return p


@pytest.fixture
def projects_ws(tmp_path):
    """A workspace with two valid projects, one broken one and a stray file."""
    root = tmp_path / "projects_ws"
    write_tree(root, {
        "CLAUDE.md": "# Root\n",
        "projects/web/CLAUDE.md": "# Web\n",
        "projects/web/HUMANS.md": "# Team\n",
        "projects/web/dunelin.json": json.dumps({
            "name": "web", "description": "Website", "status": "active",
            "repos": [{"name": "site", "url": "https://github.com/acme/site.git"}],
            "tags": ["frontend"],
        }),
        "projects/api/dunelin.json": json.dumps({"name": "api", "status": "paused"}),
        "projects/broken/dunelin.json": "{nope",
        "projects/notes.txt": "not a project",
    })
    write_config(root)
    return root
