"""Shadow sync: pull the shadow repo, diff it against the workspace, apply.

The flow is ``IDLE -> PULLING -> DIFFING -> AWAITING_SELECTION -> COPYING
-> DONE``.  An empty diff goes straight from ``DIFFING`` to ``DONE``.  A
failed pull ends in ``ERROR`` with a ``PULL_FAILED`` outcome; I/O errors
while copying propagate to the caller.

Known limitation: the diff is one-directional.  A file removed upstream
but still present in the workspace is never flagged, so workspaces can
keep user-only content the shadow does not track.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ._glob import DEFAULT_IGNORE
from .config import WorkspaceConfig, read_workspace_config
from .copy import CopyReport, FileChange, copy_from_shadow, diff_shadow
from .exceptions import RemoteError, WorkspaceNotFoundError
from .remote import pull_repo
from .workspace import has_shadow, shadow_path

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

class SyncState(str, Enum):
    IDLE = "idle"
    PULLING = "pulling"
    DIFFING = "diffing"
    AWAITING_SELECTION = "awaiting_selection"
    COPYING = "copying"
    DONE = "done"
    ERROR = "error"

    def __str__(self) -> str:          # noqa: D105
        return self.value


class SyncStatus(str, Enum):
    """How a sync ended."""
    NO_SHADOW = "no_shadow"
    UP_TO_DATE = "up_to_date"
    SKIPPED = "skipped"
    APPLIED = "applied"
    PULL_FAILED = "pull_failed"

    def __str__(self) -> str:          # noqa: D105
        return self.value


@dataclass(frozen=True)
class Selection:
    """Answer from the selection callback.

    Build with :meth:`all`, :meth:`paths` or :meth:`skip`.
    """
    mode: str
    chosen: frozenset[str] = frozenset()

    @classmethod
    def all(cls) -> Selection:
        return cls("all")

    @classmethod
    def paths(cls, paths: Iterable[str]) -> Selection:
        return cls("paths", frozenset(paths))

    @classmethod
    def skip(cls) -> Selection:
        return cls("skip")

    def resolve(self, changes: list[FileChange]) -> list[str]:
        """Return the paths to copy for *changes*, empty when skipping."""
        if self.mode == "all":
            return [c.path for c in changes]
        if self.mode == "paths":
            return [c.path for c in changes if c.path in self.chosen]
        return []


@dataclass
class SyncOutcome:
    """Result of :func:`sync_workspace`.

    Attributes:
        status: :class:`SyncStatus` describing how the sync ended.
        state: Last :class:`SyncState` reached.
        changes: Change set found by the diff (empty if not reached).
        report: Copy report when files were applied.
        error: Remote error message for ``PULL_FAILED``.
    """
    status: SyncStatus
    state: SyncState
    changes: list[FileChange] = field(default_factory=list)
    report: CopyReport | None = None
    error: str | None = None


SelectFn = Callable[[list[FileChange]], Selection]
PullFn = Callable[[Path], None]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def ignore_patterns_for(config: WorkspaceConfig | None) -> list[str]:
    """Return the workspace's ignore patterns, or the default set."""
    if config is not None and config.update_ignore is not None:
        return list(config.update_ignore)
    return list(DEFAULT_IGNORE)


def _load(workspace: str | Path) -> WorkspaceConfig:
    config = read_workspace_config(workspace)
    if config is None:
        raise WorkspaceNotFoundError(f"Not a Dunelin workspace: {workspace}")
    return config


def shadow_enabled(workspace: str | Path, config: WorkspaceConfig | None = None) -> bool:
    """True if the config opts into a shadow and the shadow is a git clone."""
    if config is None:
        config = _load(workspace)
    return bool(config.shadow) and has_shadow(workspace)


def plan_sync(workspace: str | Path) -> list[FileChange]:
    """Diff the shadow against *workspace* without pulling.

    Returns ``[]`` when the workspace has no shadow.
    """
    config = _load(workspace)
    if not shadow_enabled(workspace, config):
        return []
    return diff_shadow(shadow_path(workspace), workspace, ignore_patterns_for(config))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def sync_workspace(
    workspace: str | Path,
    *,
    select: SelectFn,
    pull: PullFn | None = pull_repo,
) -> SyncOutcome:
    """Pull the shadow, diff it against *workspace* and apply a selection.

    *select* receives the non-empty change list and returns a
    :class:`Selection`.  *pull* updates the shadow in place; pass ``None``
    to diff against the shadow as it is.

    Raises :class:`WorkspaceNotFoundError` if *workspace* has no valid
    config.  Copy errors (``OSError``) propagate.
    """
    workspace = Path(workspace)
    config = _load(workspace)

    if not shadow_enabled(workspace, config):
        logger.debug("no shadow in %s", workspace)
        return SyncOutcome(SyncStatus.NO_SHADOW, SyncState.DONE)

    shadow = shadow_path(workspace)
    if pull is not None:
        try:
            pull(shadow)
        except RemoteError as exc:
            logger.debug("pull failed in %s: %s", shadow, exc)
            return SyncOutcome(SyncStatus.PULL_FAILED, SyncState.ERROR, error=str(exc))

    patterns = ignore_patterns_for(config)
    changes = diff_shadow(shadow, workspace, patterns)
    if not changes:
        return SyncOutcome(SyncStatus.UP_TO_DATE, SyncState.DONE)

    paths = select(changes).resolve(changes)
    if not paths:
        return SyncOutcome(SyncStatus.SKIPPED, SyncState.DONE, changes=changes)

    logger.debug("applying %d file(s) to %s", len(paths), workspace)
    report = copy_from_shadow(shadow, workspace, patterns, paths)
    return SyncOutcome(SyncStatus.APPLIED, SyncState.DONE, changes=changes, report=report)
