"""Diff and copy files from a shadow repository into a workspace.

``diff_shadow`` reports what the shadow has that the workspace lacks or
holds differently; ``copy_from_shadow`` applies a chosen subset.
Both honour the same ignore patterns and never touch ``.git``.
"""

from ._types import ChangeKind, CopyReport, FileChange
from ._resolve import walk_files, _walk_local_paths
from ._io import _copy_file, _files_equal
from ._ops import copy_from_shadow, diff_shadow

__all__ = [
    # Public types
    "ChangeKind", "CopyReport", "FileChange",
    # Public functions
    "copy_from_shadow", "diff_shadow", "walk_files",
]
