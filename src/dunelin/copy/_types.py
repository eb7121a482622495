"""Data structures for diff/copy operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ChangeKind(str, Enum):
    """Kind of change: ``ADDED`` or ``MODIFIED``."""
    ADDED = "added"
    MODIFIED = "modified"

    def __str__(self) -> str:          # noqa: D105
        return self.value

    @property
    def symbol(self) -> str:
        """``+`` for added, ``~`` for modified."""
        return "+" if self is ChangeKind.ADDED else "~"


@dataclass(frozen=True)
class FileChange:
    """A path that differs between the shadow and the workspace.

    Attributes:
        path: Relative path (forward slashes), valid against both roots.
        kind: :class:`ChangeKind` of the change.
    """
    path: str
    kind: ChangeKind


@dataclass
class CopyReport:
    """Result of :func:`~dunelin.copy.copy_from_shadow`.

    Attributes:
        copied: Paths actually written to the target.
        skipped: Paths left alone, either ignored or not selected.
    """
    copied: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.copied)
