"""Directory walking."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

GIT_DIR = ".git"


def _walk_local_paths(
    local_path: str | Path,
    *,
    is_ignored: Callable[[str], bool] | None = None,
) -> list[str]:
    """Return relative paths of every file under *local_path*.

    ``.git`` directories are pruned at any depth and never descended
    into.  Symlinked directories are followed unless they point back at
    one of their own ancestors.  When *is_ignored* is given, ignored
    directories are pruned and ignored files dropped.  A missing root
    yields an empty list; any directory that cannot be listed raises.
    """
    base = Path(local_path)
    if not base.is_dir():
        return []

    def _onerror(exc: OSError) -> None:
        raise exc

    # real paths of each directory's ancestors, itself included
    ancestors: dict[str, frozenset[str]] = {str(base): frozenset([os.path.realpath(base)])}

    result: list[str] = []
    for dirpath, dirnames, filenames in os.walk(base, onerror=_onerror, followlinks=True):
        dp = Path(dirpath)
        rel_dir = dp.relative_to(base).as_posix()
        rel_dir = "" if rel_dir == "." else rel_dir
        seen = ancestors.pop(dirpath)

        keep = []
        for dname in dirnames:
            if dname == GIT_DIR:
                continue
            rel = f"{rel_dir}/{dname}" if rel_dir else dname
            if is_ignored is not None and is_ignored(rel):
                continue
            real = os.path.realpath(os.path.join(dirpath, dname))
            if real in seen:
                logger.debug("not following symlink cycle at %s", rel)
                continue
            ancestors[os.path.join(dirpath, dname)] = seen | {real}
            keep.append(dname)
        dirnames[:] = keep

        for fname in filenames:
            rel = f"{rel_dir}/{fname}" if rel_dir else fname
            if is_ignored is not None and is_ignored(rel):
                continue
            result.append(rel)
    logger.debug("walked %s: %d file(s)", base, len(result))
    return result


def walk_files(
    root: str | Path,
    *,
    is_ignored: Callable[[str], bool] | None = None,
) -> list[str]:
    """Return relative paths of every regular file under *root*.

    Order is unspecified.  ``.git`` directories are skipped entirely.
    """
    return _walk_local_paths(root, is_ignored=is_ignored)
