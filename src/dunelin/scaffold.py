"""Workspace creation: from a git template or from the built-in template."""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .block import inject_block
from .config import (
    DEFAULT_CONTEXT_FILE,
    RepoConfig,
    read_workspace_config,
    update_workspace_config,
)
from .copy import CopyReport, copy_from_shadow
from .exceptions import RemoteError
from .remote import clone_repo
from .templates import BASE_TEMPLATE, TemplateVars, write_template
from .workspace import PROJECTS_DIR, list_projects, shadow_path

logger = logging.getLogger(__name__)

CloneFn = Callable[[str, Path], None]


@dataclass
class RepoCloneResult:
    name: str
    success: bool
    error: str | None = None


@dataclass
class ProjectRepos:
    project_name: str
    project_path: Path
    repos: list[RepoConfig]


# ---------------------------------------------------------------------------
# Workspace init
# ---------------------------------------------------------------------------

def init_from_git(
    url: str,
    target: str | Path,
    *,
    shadow: bool = True,
    clone: CloneFn = clone_repo,
) -> CopyReport:
    """Create a workspace at *target* from the git template at *url*.

    With *shadow*, the template is cloned to ``.dunelin/shadow`` and kept
    for later ``update`` runs.  Otherwise it is cloned to a temporary
    directory that is discarded once its files are copied.  Raises
    :class:`~dunelin.exceptions.RemoteError` if the clone fails.
    """
    target = Path(target)
    target.mkdir(parents=True, exist_ok=True)

    if shadow:
        source = shadow_path(target)
        clone(url, source)
        report = copy_from_shadow(source, target)
    else:
        with tempfile.TemporaryDirectory(prefix="dunelin-") as tmp:
            source = Path(tmp) / "template"
            clone(url, source)
            report = copy_from_shadow(source, target)
    logger.debug("populated %s with %d file(s) from %s", target, len(report.copied), url)

    data = update_workspace_config(target, template="custom", templateUrl=url, shadow=shadow)
    _inject_root_block(target, data.get("contextFile", DEFAULT_CONTEXT_FILE))
    return report


def init_from_builtin(
    target: str | Path,
    *,
    workspace_name: str,
    user_name: str,
    user_role: str,
    context_file: str = DEFAULT_CONTEXT_FILE,
) -> list[str]:
    """Write the built-in base template to *target*.

    ``CLAUDE.md`` files are renamed to *context_file* when it differs.
    Returns the relative paths written.
    """
    target = Path(target)
    written = write_template(
        BASE_TEMPLATE, target,
        TemplateVars(workspace_name=workspace_name, user_name=user_name, user_role=user_role),
    )
    if context_file != DEFAULT_CONTEXT_FILE:
        rename_context_files(target, context_file)

    update_workspace_config(target, contextFile=context_file, template="base")
    _inject_root_block(target, context_file)
    return written


def rename_context_files(workspace: str | Path, new_name: str) -> None:
    """Rename ``CLAUDE.md`` at the root and in each project to *new_name*."""
    workspace = Path(workspace)
    candidates = [workspace]
    projects_dir = workspace / PROJECTS_DIR
    if projects_dir.is_dir():
        candidates += sorted(p for p in projects_dir.iterdir() if p.is_dir())
    for directory in candidates:
        old = directory / DEFAULT_CONTEXT_FILE
        if old.is_file():
            old.rename(directory / new_name)


def _inject_root_block(workspace: Path, context_file: str) -> None:
    config = read_workspace_config(workspace)
    if not inject_block(workspace / context_file, config):
        logger.debug("no %s in %s; managed block not written", context_file, workspace)


# ---------------------------------------------------------------------------
# Project repos
# ---------------------------------------------------------------------------

def projects_with_repos(workspace: str | Path) -> list[ProjectRepos]:
    """Projects whose ``dunelin.json`` lists at least one repo."""
    return [
        ProjectRepos(p.name, p.path, p.config.repos)
        for p in list_projects(workspace)
        if p.config.repos
    ]


def clone_project_repos(
    project_path: str | Path,
    repos: list[RepoConfig],
    *,
    clone: CloneFn = clone_repo,
) -> list[RepoCloneResult]:
    """Clone *repos* into ``<project>/repos/<name>``.

    A failing repo is recorded and the rest are still attempted.
    """
    repos_dir = Path(project_path) / "repos"
    repos_dir.mkdir(parents=True, exist_ok=True)
    results: list[RepoCloneResult] = []
    for repo in repos:
        try:
            clone(repo.url, repos_dir / repo.name)
        except RemoteError as exc:
            results.append(RepoCloneResult(repo.name, False, str(exc)))
        else:
            results.append(RepoCloneResult(repo.name, True))
    return results
