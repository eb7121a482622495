"""Diff and selective copy between a shadow tree and a workspace."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Sequence

from .._glob import compile_patterns
from ._io import _copy_file, _files_equal
from ._resolve import _walk_local_paths
from ._types import ChangeKind, CopyReport, FileChange

logger = logging.getLogger(__name__)


def diff_shadow(
    shadow_root: str | Path,
    workspace_root: str | Path,
    ignore_patterns: Sequence[str] | None = None,
) -> list[FileChange]:
    """Compare *shadow_root* against *workspace_root*.

    Only files present in the shadow are considered: a file missing from
    the workspace is ``ADDED``, one whose bytes differ is ``MODIFIED``,
    identical files are omitted.  Files that exist only in the workspace
    are never reported.  Paths matching *ignore_patterns* (default
    ``["**/repos"]``) are dropped before comparison.

    Returns changes sorted by path.
    """
    shadow = Path(shadow_root)
    workspace = Path(workspace_root)
    matcher = compile_patterns(ignore_patterns)

    changes: list[FileChange] = []
    for rel in sorted(_walk_local_paths(shadow, is_ignored=matcher.is_ignored)):
        target = workspace / rel
        if not target.is_file():
            changes.append(FileChange(rel, ChangeKind.ADDED))
        elif not _files_equal(shadow / rel, target):
            changes.append(FileChange(rel, ChangeKind.MODIFIED))
    logger.debug("diff %s -> %s: %d change(s)", shadow, workspace, len(changes))
    return changes


def copy_from_shadow(
    shadow_root: str | Path,
    target_root: str | Path,
    ignore_patterns: Sequence[str] | None = None,
    selected: Iterable[str] | None = None,
) -> CopyReport:
    """Copy files from *shadow_root* into *target_root*.

    With *selected* of ``None`` every non-ignored file is copied.
    Otherwise only paths in *selected* are copied and the rest are
    reported as skipped, together with ignored paths.  Existing files are
    overwritten.  The first I/O error aborts the whole operation.
    """
    shadow = Path(shadow_root)
    target = Path(target_root)
    matcher = compile_patterns(ignore_patterns)
    wanted = None if selected is None else set(selected)

    report = CopyReport()
    for rel in sorted(_walk_local_paths(shadow)):
        if matcher.is_ignored(rel) or (wanted is not None and rel not in wanted):
            report.skipped.append(rel)
            continue
        _copy_file(shadow / rel, target / rel)
        report.copied.append(rel)
    logger.debug(
        "copied %d file(s) from %s to %s (%d skipped)",
        len(report.copied), shadow, target, len(report.skipped),
    )
    return report
