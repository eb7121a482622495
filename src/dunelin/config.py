"""Workspace and project configuration.

Configs are plain JSON files.  Validation is a pure function returning
the parsed dataclass (or ``None``) and a list of problems; anything that
fails to load or validate is treated as absent by the readers below.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_DIR = ".dunelin"
CONFIG_FILE = "config.json"
LEGACY_CONFIG_FILE = "dunelin.json"
PROJECT_CONFIG_FILE = "dunelin.json"

DEFAULT_VERSION = "1.0.0"
DEFAULT_CONTEXT_FILE = "CLAUDE.md"

_REPO_URL_PREFIXES = ("http://", "https://", "ssh://", "git://", "file://", "git@")


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class WorkspaceConfig:
    """Contents of ``.dunelin/config.json``."""
    created_at: str
    updated_at: str
    version: str = DEFAULT_VERSION
    context_file: str = DEFAULT_CONTEXT_FILE
    template: str | None = None
    template_url: str | None = None
    shadow: bool | None = None
    update_ignore: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "version": self.version,
            "contextFile": self.context_file,
            "template": self.template,
            "templateUrl": self.template_url,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.shadow is not None:
            data["shadow"] = self.shadow
        if self.update_ignore is not None:
            data["updateIgnore"] = list(self.update_ignore)
        return data


@dataclass
class RepoConfig:
    name: str
    url: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "url": self.url}


@dataclass
class ProjectConfig:
    """Contents of ``projects/<name>/dunelin.json``."""
    name: str
    description: str = ""
    status: str = "active"
    repos: list[RepoConfig] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "status": self.status,
            "repos": [r.to_dict() for r in self.repos],
            "tags": list(self.tags),
        }


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def _check(raw: dict, key: str, kind: type | tuple, errors: list[str], *,
           nullable: bool = False, required: bool = False) -> None:
    if key not in raw:
        if required:
            errors.append(f"{key}: required")
        return
    value = raw[key]
    if value is None and nullable:
        return
    # bool is an int subclass; keep the checks strict
    if isinstance(value, bool) and kind is not bool:
        errors.append(f"{key}: expected {getattr(kind, '__name__', kind)}")
    elif not isinstance(value, kind):
        errors.append(f"{key}: expected {getattr(kind, '__name__', kind)}")


def validate_workspace_config(raw: Any) -> tuple[WorkspaceConfig | None, list[str]]:
    """Validate a decoded JSON value as a workspace config.

    Returns ``(config, [])`` on success or ``(None, errors)``.
    """
    if not isinstance(raw, dict):
        return None, ["config must be a JSON object"]
    errors: list[str] = []
    _check(raw, "version", str, errors)
    _check(raw, "contextFile", str, errors)
    _check(raw, "template", str, errors, nullable=True)
    _check(raw, "templateUrl", str, errors, nullable=True)
    _check(raw, "createdAt", str, errors, required=True)
    _check(raw, "updatedAt", str, errors, required=True)
    _check(raw, "shadow", bool, errors)
    if "updateIgnore" in raw and not _is_str_list(raw["updateIgnore"]):
        errors.append("updateIgnore: expected list of strings")
    if errors:
        return None, errors

    return WorkspaceConfig(
        version=raw.get("version", DEFAULT_VERSION),
        context_file=raw.get("contextFile", DEFAULT_CONTEXT_FILE),
        template=raw.get("template"),
        template_url=raw.get("templateUrl"),
        created_at=raw["createdAt"],
        updated_at=raw["updatedAt"],
        shadow=raw.get("shadow"),
        update_ignore=list(raw["updateIgnore"]) if "updateIgnore" in raw else None,
    ), []


def _validate_repo(raw: Any, index: int, errors: list[str]) -> RepoConfig | None:
    if not isinstance(raw, dict):
        errors.append(f"repos[{index}]: expected object")
        return None
    name, url = raw.get("name"), raw.get("url")
    if not isinstance(name, str):
        errors.append(f"repos[{index}].name: expected str")
    if not isinstance(url, str) or not url.startswith(_REPO_URL_PREFIXES):
        errors.append(f"repos[{index}].url: expected a git URL")
    if not isinstance(name, str) or not isinstance(url, str):
        return None
    return RepoConfig(name=name, url=url)


def validate_project_config(raw: Any) -> tuple[ProjectConfig | None, list[str]]:
    """Validate a decoded JSON value as a project config."""
    if not isinstance(raw, dict):
        return None, ["config must be a JSON object"]
    errors: list[str] = []
    _check(raw, "name", str, errors, required=True)
    _check(raw, "description", str, errors)
    _check(raw, "status", str, errors)
    if "tags" in raw and not _is_str_list(raw["tags"]):
        errors.append("tags: expected list of strings")
    repos: list[RepoConfig] = []
    if "repos" in raw:
        if not isinstance(raw["repos"], list):
            errors.append("repos: expected list")
        else:
            for i, item in enumerate(raw["repos"]):
                repo = _validate_repo(item, i, errors)
                if repo is not None:
                    repos.append(repo)
    if errors:
        return None, errors

    return ProjectConfig(
        name=raw["name"],
        description=raw.get("description", ""),
        status=raw.get("status", "active"),
        repos=repos,
        tags=list(raw.get("tags", [])),
    ), []


# ---------------------------------------------------------------------------
# Reading and writing
# ---------------------------------------------------------------------------

def config_path(workspace: str | Path) -> Path:
    return Path(workspace) / CONFIG_DIR / CONFIG_FILE


def legacy_config_path(workspace: str | Path) -> Path:
    return Path(workspace) / LEGACY_CONFIG_FILE


def read_json(path: str | Path) -> Any:
    """Return decoded JSON from *path*, or ``None`` if unreadable."""
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.debug("cannot read %s: %s", path, exc)
        return None


def read_workspace_config(workspace: str | Path) -> WorkspaceConfig | None:
    """Read the workspace config, falling back to the legacy location.

    Looks at ``.dunelin/config.json`` first and only if that file is
    absent at ``dunelin.json``.  Returns ``None`` when neither yields a
    valid config.
    """
    primary = config_path(workspace)
    path = primary if primary.is_file() else legacy_config_path(workspace)
    raw = read_json(path)
    if raw is None:
        return None
    config, errors = validate_workspace_config(raw)
    if errors:
        logger.debug("invalid workspace config %s: %s", path, "; ".join(errors))
    return config


def read_project_config(project: str | Path) -> ProjectConfig | None:
    """Read ``dunelin.json`` from a project directory, or ``None``."""
    path = Path(project) / PROJECT_CONFIG_FILE
    raw = read_json(path)
    if raw is None:
        return None
    config, errors = validate_project_config(raw)
    if errors:
        logger.debug("invalid project config %s: %s", path, "; ".join(errors))
    return config


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def update_workspace_config(workspace: str | Path, **updates: Any) -> dict[str, Any]:
    """Merge *updates* into the workspace config and write it.

    Keys use the JSON spelling (``contextFile``, ``templateUrl`` ...).
    Existing content is read from the primary location, then the legacy
    one; the result is always written to ``.dunelin/config.json``.
    ``updatedAt`` is refreshed and ``createdAt`` set if missing.
    """
    primary = config_path(workspace)
    existing = read_json(primary if primary.is_file() else legacy_config_path(workspace))
    data: dict[str, Any] = existing if isinstance(existing, dict) else {}

    now = _now()
    data.update(updates)
    data["updatedAt"] = now
    if not data.get("createdAt"):
        data["createdAt"] = now
    data.setdefault("version", DEFAULT_VERSION)
    data.setdefault("contextFile", DEFAULT_CONTEXT_FILE)
    data.setdefault("template", None)
    data.setdefault("templateUrl", None)

    primary.parent.mkdir(parents=True, exist_ok=True)
    primary.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    logger.debug("wrote %s", primary)
    return data
