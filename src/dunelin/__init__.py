"""dunelin: scaffold and maintain agentic workspaces."""

__version__ = "0.2.1"

from .copy import ChangeKind, CopyReport, FileChange, copy_from_shadow, diff_shadow, walk_files
from ._glob import DEFAULT_IGNORE, IgnoreMatcher, compile_patterns
from .config import ProjectConfig, RepoConfig, WorkspaceConfig, read_workspace_config
from .exceptions import DunelinError, RemoteError, WorkspaceNotFoundError
from .sync import Selection, SyncOutcome, SyncState, SyncStatus, plan_sync, sync_workspace

__all__ = [
    "__version__",
    "ChangeKind", "CopyReport", "FileChange",
    "copy_from_shadow", "diff_shadow", "walk_files",
    "DEFAULT_IGNORE", "IgnoreMatcher", "compile_patterns",
    "ProjectConfig", "RepoConfig", "WorkspaceConfig", "read_workspace_config",
    "DunelinError", "RemoteError", "WorkspaceNotFoundError",
    "Selection", "SyncOutcome", "SyncState", "SyncStatus", "plan_sync", "sync_workspace",
]
