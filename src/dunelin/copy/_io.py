"""File I/O helpers: byte comparison and verbatim copies."""

from __future__ import annotations

import shutil
from pathlib import Path

_CHUNK_SIZE = 65536


def _files_equal(a: Path, b: Path) -> bool:
    """Return True if *a* and *b* have identical bytes.

    Sizes are compared first; contents are then streamed in chunks so
    large files are never held in memory.
    """
    if a.stat().st_size != b.stat().st_size:
        return False
    with open(a, "rb") as fa, open(b, "rb") as fb:
        while True:
            ca = fa.read(_CHUNK_SIZE)
            cb = fb.read(_CHUNK_SIZE)
            if ca != cb:
                return False
            if not ca:
                return True


def _copy_file(src: Path, dest: Path) -> None:
    """Copy *src* to *dest* verbatim, creating parent directories."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    if dest.is_symlink():
        dest.unlink()
    shutil.copyfile(src, dest)
